import json
import logging
import time

import httpx
import pytest

from adapters.http_client import MAX_REDIRECTS, HttpxTransport, build_client
from core.config import AppSettings
from core.domain.errors import TransportError


def make_transport(handler, *, verbose: bool = False) -> HttpxTransport:
    settings = AppSettings(_env_file=None)
    return HttpxTransport(build_client(settings, transport=httpx.MockTransport(handler)), verbose=verbose)


def test_post_json_sends_payload_and_headers():
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["content_type"] = request.headers["content-type"]
        seen["accept"] = request.headers["accept"]
        seen["body"] = request.content.decode("utf-8")
        seen["timeout"] = request.extensions["timeout"]
        return httpx.Response(200, json={"part1": "A"})

    with make_transport(handler) as transport:
        result = transport.post_json("https://host/api", {"msg": "привет", "uri": "/private/next"}, 3)

    assert result.status_code == 200
    assert json.loads(result.body) == {"part1": "A"}
    assert seen["method"] == "POST"
    assert seen["content_type"] == "application/json"
    assert seen["accept"] == "application/json, text/plain, */*"
    assert seen["body"] == '{"msg":"привет","uri":"/private/next"}'
    assert seen["timeout"] == {"connect": 3, "read": 3, "write": 3, "pool": 3}


def test_get_returns_status_and_text_without_validating():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        return httpx.Response(503, text="busy")

    with make_transport(handler) as transport:
        result = transport.get("https://host/part2", 3)

    assert result.status_code == 503
    assert result.body == "busy"
    assert not result.ok


def test_redirects_are_followed():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(302, headers={"Location": "https://host/new"})
        return httpx.Response(200, text="second")

    with make_transport(handler) as transport:
        result = transport.get("https://host/old", 3)

    assert result.body == "second"
    assert result.url == "https://host/new"


def test_redirect_loop_becomes_transport_error():
    hops: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        hops.append(str(request.url))
        return httpx.Response(302, headers={"Location": f"https://host/loop{len(hops)}"})

    with make_transport(handler) as transport:
        with pytest.raises(TransportError):
            transport.get("https://host/loop", 3)

    assert len(hops) == MAX_REDIRECTS + 1


def test_connect_error_becomes_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with make_transport(handler) as transport:
        with pytest.raises(TransportError, match="connection refused") as excinfo:
            transport.post_json("https://host/api", {"code": "x"}, 3)

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_verbose_logs_each_exchange(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, text="ok")

    caplog.set_level(logging.INFO, logger="adapters.http_client")
    with make_transport(handler, verbose=True) as transport:
        transport.post_json("https://host/api", {"code": "AB"}, 3)
        transport.get("https://host/part2", 3)

    messages = [r.getMessage() for r in caplog.records if r.name == "adapters.http_client"]
    assert messages == [
        'POST https://host/api payload={"code":"AB"} -> HTTP 201',
        "GET https://host/part2 -> HTTP 201",
    ]


def test_quiet_transport_does_not_log(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="ok")

    caplog.set_level(logging.INFO, logger="adapters.http_client")
    with make_transport(handler) as transport:
        transport.get("https://host/part2", 3)

    assert [r for r in caplog.records if r.name == "adapters.http_client"] == []


def test_build_client_defaults():
    settings = AppSettings(_env_file=None, user_agent="tester/1.0", timeout_seconds=7)
    with build_client(settings, extra_headers={"X-Trace": "1"}) as client:
        assert client.headers["user-agent"] == "tester/1.0"
        assert client.headers["accept"] == "application/json, text/plain, */*"
        assert client.headers["x-trace"] == "1"
        assert client.timeout.connect == 7
        assert client.follow_redirects is True
        assert client.max_redirects == MAX_REDIRECTS


def test_timeout_bounds_total_duration_of_slow_body():
    def slow_body():
        for _ in range(10):
            time.sleep(0.05)
            yield b"x"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=slow_body())

    started = time.monotonic()
    with make_transport(handler) as transport:
        with pytest.raises(TransportError, match="timed out after 0.12s"):
            transport.get("https://host/slow", 0.12)

    assert time.monotonic() - started < 0.4


def test_body_is_decoded_with_response_charset():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content="código".encode("latin-1"),
            headers={"Content-Type": "text/plain; charset=latin-1"},
        )

    with make_transport(handler) as transport:
        assert transport.get("https://host/part2", 3).body == "código"
