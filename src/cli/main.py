"""CLI principal (Typer).

Por qué Typer:
- Flags tipados con ayuda autogenerada, sin parsear `sys.argv` a mano.
- La CLI solo arma la config y presenta resultados; el flujo vive en
  `core.services.handshake_pipeline`.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from adapters.http_client import HttpxTransport, build_client
from adapters.json_exporter import export_result_json
from cli import doctor
from cli.ui_components import (
    ConsoleResultSink,
    build_config_table,
    configure_logging,
    print_banner,
    stage_label,
)
from core.config import AppSettings
from core.domain.models import HandshakeConfig, HandshakeStage
from core.services.handshake_pipeline import PipelineHooks, execute_handshake

app = typer.Typer(
    no_args_is_help=True,
    help="Three-step HTTP handshake client: POST msg/uri, GET the second part, POST the combined code.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_error_console = Console(stderr=True)


def build_transport(settings: AppSettings, config: HandshakeConfig) -> HttpxTransport:
    return HttpxTransport(build_client(settings), verbose=config.verbose)


@app.command(name="run")
def handshake(
    endpoint: str | None = typer.Option(None, "--endpoint", help="Endpoint URL (first and final POST)."),
    msg: str | None = typer.Option(None, "--msg", help="Message sent as `msg` in the first POST."),
    uri: str | None = typer.Option(None, "--uri", help="Path sent as `uri`; used when the response has no uri/next."),
    timeout: float | None = typer.Option(None, "--timeout", min=0.001, help="Timeout per request, in seconds."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace every HTTP exchange on stderr."),
    json_out: Path | None = typer.Option(None, "--json-out", help="Write the full result as JSON to this path."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Run the handshake and print the final message."""

    settings = AppSettings()
    config = settings.to_config(
        endpoint=endpoint,
        msg=msg,
        uri=uri,
        timeout=timeout,
        verbose=True if verbose else None,
    )
    configure_logging(config.verbose, _error_console)

    if not no_banner:
        print_banner(_console)
    if config.verbose:
        _console.print(build_config_table(config))

    sink = ConsoleResultSink(_console, _error_console)
    with _console.status(stage_label(HandshakeStage.START)) as status:
        hooks = PipelineHooks(stage=lambda stage: status.update(stage_label(stage)))
        with build_transport(settings, config) as transport:
            result = execute_handshake(config, transport, sink, hooks)

    if result is None:
        raise typer.Exit(code=1)

    if config.verbose:
        _console.print(f"[dim]Combined code:[/dim] {result.combined_code}")
    if json_out is not None:
        path = export_result_json(result=result, output_path=json_out)
        _console.print(f"[green]Saved result to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
