"""Contrato del destino de presentación (consola, respuesta web, tests)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ResultSink(Protocol):
    """Recibe el resultado final de una ejecución.

    Exactamente uno de los dos métodos se invoca por ejecución.
    """

    def success(self, message: str) -> None:
        ...

    def failure(self, message: str) -> None:
        ...
