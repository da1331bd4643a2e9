"""Contrato del transporte HTTP.

Por qué Protocol:
- El orquestador depende de esta abstracción, no de httpx.
- Permite sustituir el transporte real por un fake en memoria en los tests.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from core.domain.models import HttpResponse


@runtime_checkable
class HttpTransport(Protocol):
    """Frontera de I/O pura: no valida códigos de estado.

    Reglas de diseño:
    - Ambas operaciones son síncronas y bloqueantes; el flujo es secuencial.
    - Un fallo de red se señala con `core.domain.errors.TransportError`.
    """

    def post_json(self, url: str, payload: Mapping[str, Any], timeout: float) -> HttpResponse:
        """Envía `payload` como JSON por POST y devuelve la respuesta cruda."""

        ...

    def get(self, url: str, timeout: float) -> HttpResponse:
        """Hace un GET sin cuerpo y devuelve la respuesta cruda."""

        ...
