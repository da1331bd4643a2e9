"""Resolución de la ruta del segundo salto.

Reglas:
- `http://...` / `https://...` se devuelve tal cual.
- `/ruta` cuelga del origen del endpoint (esquema + host).
- `ruta` cuelga del directorio del endpoint (sin el último segmento).

No es resolución RFC 3986 completa: query y fragmento del endpoint se ignoran
y no se normalizan segmentos `.`/`..`.
"""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

_ABSOLUTE_PREFIXES = ("http://", "https://")


def is_absolute(candidate: str) -> bool:
    return candidate.lower().startswith(_ABSOLUTE_PREFIXES)


def endpoint_origin(endpoint: str) -> str:
    parts = urlsplit(endpoint)
    return urlunsplit((parts.scheme, parts.netloc, "", "", ""))


def endpoint_directory(endpoint: str) -> str:
    """`https://host/private/interview.php` -> `https://host/private`."""

    parts = urlsplit(endpoint)
    path = parts.path.rsplit("/", 1)[0]
    return urlunsplit((parts.scheme, parts.netloc, path.rstrip("/"), "", ""))


def resolve_uri(candidate: str, endpoint: str) -> str:
    """Devuelve la URL absoluta a consultar en el GET."""

    if is_absolute(candidate):
        return candidate
    base = endpoint_origin(endpoint) if candidate.startswith("/") else endpoint_directory(endpoint)
    return f"{base}/{candidate.lstrip('/')}"
