"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers, redirecciones y la traza verbose.
- Traduce los errores de httpx a `TransportError` para que el Core no
  dependa de httpx.
- Facilita testeo: se puede construir sobre un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import httpx

from core.config import AppSettings
from core.domain.errors import TransportError
from core.domain.models import HttpResponse
from core.services.response_interpreter import dumps_compact

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 5

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json, text/plain, */*",
}


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con los defaults del handshake.

    `transport` solo se usa en tests (p.ej. `httpx.MockTransport`).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent, **DEFAULT_HEADERS}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        max_redirects=MAX_REDIRECTS,
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """Implementación de `core.interfaces.transport.HttpTransport` sobre httpx."""

    def __init__(self, client: httpx.Client | None = None, *, verbose: bool = False) -> None:
        self._client = client or build_client()
        self._verbose = verbose

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def post_json(self, url: str, payload: Mapping[str, Any], timeout: float) -> HttpResponse:
        body = dumps_compact(dict(payload))
        response = self._send(
            "POST",
            url,
            timeout,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        if self._verbose:
            logger.info("POST %s payload=%s -> HTTP %s", url, body, response.status_code)
        return response

    def get(self, url: str, timeout: float) -> HttpResponse:
        response = self._send("GET", url, timeout)
        if self._verbose:
            logger.info("GET %s -> HTTP %s", url, response.status_code)
        return response

    def _send(self, method: str, url: str, timeout: float, **kwargs: Any) -> HttpResponse:
        """Envía la petición con `timeout` como límite total (conexión + cuerpo).

        httpx solo acota cada fase por separado; el cuerpo se lee por trozos
        comprobando un deadline monotónico.
        """

        deadline = time.monotonic() + timeout
        try:
            with self._client.stream(
                method,
                url,
                timeout=httpx.Timeout(timeout),
                **kwargs,
            ) as response:
                chunks: list[bytes] = []
                self._check_deadline(deadline, method, url, timeout)
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    self._check_deadline(deadline, method, url, timeout)
                content = b"".join(chunks)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            if self._verbose:
                logger.info("%s %s -> failed: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        return HttpResponse(
            status_code=response.status_code,
            body=content.decode(response.encoding or "utf-8", errors="replace"),
            url=str(response.url),
        )

    def _check_deadline(self, deadline: float, method: str, url: str, timeout: float) -> None:
        if time.monotonic() > deadline:
            if self._verbose:
                logger.info("%s %s -> failed: timed out after %ss", method, url, timeout)
            raise TransportError(f"{method} {url} failed: timed out after {timeout}s")
