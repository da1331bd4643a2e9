"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde (timeout > 0, endpoint no vacío) sin acoplar
  el Core a httpx ni a la CLI.
- Los modelos son inmutables (`frozen`): una ejecución nunca muta su config.

Nota:
- Estos modelos describen *qué* viaja entre etapas, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class HandshakeStage(str, Enum):
    """Etapas del handshake, en orden. `FAILED` es terminal."""

    START = "start"
    FIRST_REQUEST_SENT = "first_request_sent"
    FIRST_PARSED = "first_parsed"
    SECOND_REQUEST_SENT = "second_request_sent"
    SECOND_PARSED = "second_parsed"
    FINAL_REQUEST_SENT = "final_request_sent"
    DONE = "done"
    FAILED = "failed"


class HandshakeConfig(BaseModel):
    """Configuración congelada de una ejecución."""

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(
        ...,
        min_length=1,
        description="Endpoint que recibe el primer POST y el POST final.",
    )
    msg: str = Field(
        ...,
        description="Texto enviado como `msg` en el primer POST.",
    )
    uri: str = Field(
        ...,
        description="Ruta enviada como `uri`; fallback del siguiente salto.",
    )
    timeout: float = Field(
        default=15.0,
        gt=0,
        description="Timeout único (conexión y total) por request, en segundos.",
    )
    verbose: bool = Field(
        default=False,
        description="Si se trazan los intercambios HTTP.",
    )


class HttpResponse(BaseModel):
    """Respuesta cruda devuelta por el transporte."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(..., description="Código HTTP final (tras redirecciones).")
    body: str = Field(default="", description="Cuerpo decodificado como texto.")
    url: str = Field(default="", description="URL final tras seguir redirecciones.")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HandshakeResult(BaseModel):
    """Resultado completo de un handshake exitoso.

    Solo existe si las tres etapas terminaron bien: no hay resultados parciales.
    """

    model_config = ConfigDict(frozen=True)

    part1: str = Field(..., min_length=1, description="Primer fragmento del código.")
    next_url: str = Field(..., min_length=1, description="URL absoluta consultada en el GET.")
    part2: str = Field(..., min_length=1, description="Segundo fragmento del código.")
    combined_code: str = Field(..., min_length=1, description="`part1 + part2`, enviado como `code`.")
    message: str = Field(..., description="Mensaje final devuelto por el endpoint.")
