"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- La CLI solo aporta overrides; el Core recibe un `HandshakeConfig` inmutable
  construido una única vez en el borde.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import HandshakeConfig

DEFAULT_ENDPOINT = "https://test.icorp.uz/private/interview.php"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "code-handshake"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "code-handshake"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "code-handshake"
    return Path.home() / ".config" / "code-handshake"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` se ignoran: no borran una clave existente.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# code-handshake user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Orden de precedencia: flags de la CLI > variables de entorno > `.env` del
    proyecto > `.env` del usuario > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CODE_HANDSHAKE_",
        extra="ignore",
        case_sensitive=False,
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        min_length=8,
        description="URL del endpoint que recibe el primer y el último POST.",
    )
    msg: str = Field(
        default="hello-from-client",
        description="Mensaje enviado en el primer POST (campo `msg`).",
    )
    uri: str = Field(
        default="/private/next",
        description="Ruta enviada en el primer POST; se usa si la respuesta no trae `uri`/`next`.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Timeout por request (conexión y total, segundos).",
    )
    verbose: bool = Field(
        default=False,
        description="Traza cada intercambio HTTP en stderr.",
    )
    user_agent: str = Field(
        default="code-handshake/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )

    def to_config(
        self,
        *,
        endpoint: str | None = None,
        msg: str | None = None,
        uri: str | None = None,
        timeout: float | None = None,
        verbose: bool | None = None,
    ) -> HandshakeConfig:
        """Congela la configuración de una ejecución.

        Los overrides en `None` se descartan y se usa el valor de settings.
        """

        return HandshakeConfig(
            endpoint=endpoint if endpoint is not None else self.endpoint,
            msg=msg if msg is not None else self.msg,
            uri=uri if uri is not None else self.uri,
            timeout=timeout if timeout is not None else self.timeout_seconds,
            verbose=verbose if verbose is not None else self.verbose,
        )
