"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: AppSettings) -> tuple[bool, str]:
    """Reachability only: any HTTP status counts as reachable."""

    try:
        with build_client(settings) as client:
            response = client.get(settings.endpoint)
        return True, f"HTTP {response.status_code}"
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Show the effective settings and check that the endpoint is reachable."""

    settings = AppSettings()

    table = Table(title="code-handshake Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Endpoint", "OK", settings.endpoint)
    table.add_row("Message", "OK", settings.msg)
    table.add_row("URI", "OK", settings.uri)
    table.add_row("Timeout", "OK", f"{settings.timeout_seconds:g}s")
    env_file = get_user_env_file()
    table.add_row("User .env", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    # Connectivity (best-effort)
    ok_http, detail_http = _check_http(settings)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores defaults in the user config .env)."""

    settings = AppSettings()

    endpoint = typer.prompt("Endpoint URL", default=settings.endpoint, show_default=True).strip()
    msg = typer.prompt("Message", default=settings.msg, show_default=True).strip()
    uri = typer.prompt("URI", default=settings.uri, show_default=True).strip()
    timeout = typer.prompt("Timeout (seconds)", default=settings.timeout_seconds, type=float)

    if not endpoint:
        raise typer.BadParameter("endpoint is required")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be positive")

    env_path = write_user_env_vars(
        {
            "CODE_HANDSHAKE_ENDPOINT": endpoint,
            "CODE_HANDSHAKE_MSG": msg,
            "CODE_HANDSHAKE_URI": uri,
            "CODE_HANDSHAKE_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
