"""
Pytest configuration and fixtures
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import pytest

from core.domain.errors import TransportError
from core.domain.models import HandshakeConfig, HttpResponse

ENDPOINT = "https://host/private/interview.php"


@dataclass
class RecordedRequest:
    method: str
    url: str
    payload: dict[str, Any] | None
    timeout: float


@dataclass
class FakeTransport:
    """In-memory `HttpTransport` that replays scripted responses in order."""

    responses: list[HttpResponse | Exception]
    requests: list[RecordedRequest] = field(default_factory=list)

    def _next(self) -> HttpResponse:
        if not self.responses:
            raise AssertionError("unexpected extra request")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def post_json(self, url: str, payload: Mapping[str, Any], timeout: float) -> HttpResponse:
        self.requests.append(RecordedRequest("POST", url, dict(payload), timeout))
        return self._next()

    def get(self, url: str, timeout: float) -> HttpResponse:
        self.requests.append(RecordedRequest("GET", url, None, timeout))
        return self._next()


@dataclass
class RecordingSink:
    successes: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.successes.append(message)

    def failure(self, message: str) -> None:
        self.failures.append(message)


def response(body: str, status_code: int = 200) -> HttpResponse:
    return HttpResponse(status_code=status_code, body=body)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep settings tests independent from the developer's env and .env files."""
    for name in ("ENDPOINT", "MSG", "URI", "TIMEOUT_SECONDS", "VERBOSE", "USER_AGENT"):
        monkeypatch.delenv(f"CODE_HANDSHAKE_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config() -> HandshakeConfig:
    return HandshakeConfig(endpoint=ENDPOINT, msg="hello", uri="/private/next", timeout=5)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("POST https://host/private/interview.php failed: connection refused")
