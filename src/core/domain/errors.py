"""Errores del handshake.

Todos heredan de `HandshakeError` y son terminales: ninguno se reintenta. El
orquestador los captura en su borde exterior y los convierte en un único
mensaje `Error: ...`.
"""

from __future__ import annotations

from typing import Sequence


class HandshakeError(Exception):
    """Base de todos los errores del flujo."""


class TransportError(HandshakeError):
    """Fallo de conexión, timeout o transferencia."""


class HttpStatusError(HandshakeError):
    """Respuesta con estado fuera de [200, 300)."""

    def __init__(self, stage: str, status_code: int, body_excerpt: str) -> None:
        self.stage = stage
        self.status_code = status_code
        self.body_excerpt = body_excerpt
        super().__init__(f"{stage} failed with HTTP {status_code}. Body: {body_excerpt}")


class DecodeError(HandshakeError):
    """La primera respuesta no es JSON."""


class MissingFieldError(HandshakeError):
    def __init__(self, field: str, aliases: Sequence[str]) -> None:
        self.field = field
        self.aliases = tuple(aliases)
        super().__init__(
            f"Cannot find {field} in response (expected keys: {'/'.join(self.aliases)})."
        )


class EmptyValueError(HandshakeError):
    """Un fragmento (primero o segundo) está vacío o no es texto."""
