"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El Core solo conoce `ResultSink`; aquí vive la versión de consola.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import HandshakeConfig, HandshakeStage

_STAGE_LABELS: dict[HandshakeStage, str] = {
    HandshakeStage.START: "Sending first POST",
    HandshakeStage.FIRST_REQUEST_SENT: "Reading first response",
    HandshakeStage.FIRST_PARSED: "Fetching second part",
    HandshakeStage.SECOND_REQUEST_SENT: "Reading second response",
    HandshakeStage.SECOND_PARSED: "Sending combined code",
    HandshakeStage.FINAL_REQUEST_SENT: "Reading final response",
    HandshakeStage.DONE: "Done",
    HandshakeStage.FAILED: "Failed",
}


def configure_logging(verbose: bool, console: Console) -> None:
    """Instala un `RichHandler` en stderr; INFO solo en modo verbose."""

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("CODE-HANDSHAKE", style="bold cyan")
    subtitle = Text("POST • GET • POST", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def stage_label(stage: HandshakeStage) -> str:
    return _STAGE_LABELS[stage]


def build_config_table(config: HandshakeConfig) -> Table:
    table = Table(title="Handshake")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Endpoint", config.endpoint)
    table.add_row("Message", config.msg)
    table.add_row("URI", config.uri)
    table.add_row("Timeout", f"{config.timeout:g}s")
    return table


def build_result_panel(message: str) -> Panel:
    """Panel con el mensaje final."""

    return Panel(
        Text(message),
        title=Text("Final message:", style="bold green"),
        border_style="green",
    )


class ConsoleResultSink:
    """`ResultSink` de consola: éxito en stdout, errores en stderr."""

    def __init__(self, console: Console, error_console: Console) -> None:
        self._console = console
        self._error_console = error_console

    def success(self, message: str) -> None:
        self._console.print(build_result_panel(message))

    def failure(self, message: str) -> None:
        self._error_console.print(Text(message, style="bold red"))
