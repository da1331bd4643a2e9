"""Handshake orchestration.

The three exchanges are strictly sequential: each step consumes the output of
the previous one, and any failure ends the run. The CLI (or any other entry
point) only builds the config, picks a transport and a sink, and delegates
everything else to these helpers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from core.domain.errors import (
    DecodeError,
    EmptyValueError,
    HandshakeError,
    HttpStatusError,
    MissingFieldError,
)
from core.domain.models import HandshakeConfig, HandshakeResult, HandshakeStage, HttpResponse
from core.interfaces.sink import ResultSink
from core.interfaces.transport import HttpTransport
from core.services.response_interpreter import (
    PART1_KEYS,
    decode_json,
    excerpt,
    extract_final_message,
    extract_next_uri,
    extract_part1,
    extract_part2,
    fragment_from_body,
)
from core.services.uri_resolver import resolve_uri

logger = logging.getLogger(__name__)

FIRST_POST = "First POST"
SECOND_GET = "Second GET"
FINAL_POST = "Final POST"


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress display)."""

    stage: Callable[[HandshakeStage], None] | None = None


def _require_success(response: HttpResponse, stage: str) -> None:
    if not response.ok:
        raise HttpStatusError(stage, response.status_code, excerpt(response.body))


def _as_fragment(value: Any) -> str | None:
    """Scalar JSON values become text; objects, arrays and booleans do not."""

    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        # 1.0 -> "1"
        return str(int(value))
    return str(value)


def run_handshake(
    config: HandshakeConfig,
    transport: HttpTransport,
    hooks: PipelineHooks | None = None,
) -> HandshakeResult:
    """Run the three exchanges and return the full result.

    Raises a `HandshakeError` subclass on the first failure; no request is
    issued after it.
    """

    hooks = hooks or PipelineHooks()
    stage = HandshakeStage.START

    def advance(next_stage: HandshakeStage) -> None:
        nonlocal stage
        stage = next_stage
        logger.debug("handshake stage: %s", next_stage.value)
        if hooks.stage:
            hooks.stage(next_stage)

    try:
        advance(HandshakeStage.START)

        first = transport.post_json(
            config.endpoint,
            {"msg": config.msg, "uri": config.uri},
            config.timeout,
        )
        advance(HandshakeStage.FIRST_REQUEST_SENT)
        _require_success(first, FIRST_POST)

        first_json = decode_json(first.body)
        if first_json is None:
            raise DecodeError(f"First response is not valid JSON. Body: {excerpt(first.body)}")

        raw_part1 = extract_part1(first_json)
        if raw_part1 is None:
            raise MissingFieldError("first code part", PART1_KEYS)
        part1 = _as_fragment(raw_part1)
        if not part1:
            raise EmptyValueError("First code part is empty or not a string value.")

        next_url = resolve_uri(extract_next_uri(first_json, config.uri), config.endpoint)
        advance(HandshakeStage.FIRST_PARSED)

        second = transport.get(next_url, config.timeout)
        advance(HandshakeStage.SECOND_REQUEST_SENT)
        _require_success(second, SECOND_GET)

        part2 = fragment_from_body(second.body, extract_part2)
        if not isinstance(part2, str) or part2 == "":
            raise EmptyValueError("Cannot determine second code part from the designated URI response.")
        advance(HandshakeStage.SECOND_PARSED)

        combined = part1 + part2

        final = transport.post_json(config.endpoint, {"code": combined}, config.timeout)
        advance(HandshakeStage.FINAL_REQUEST_SENT)
        _require_success(final, FINAL_POST)

        message = fragment_from_body(final.body, extract_final_message)
        advance(HandshakeStage.DONE)
    except HandshakeError:
        logger.debug("handshake failed after stage %s", stage.value)
        advance(HandshakeStage.FAILED)
        raise

    return HandshakeResult(
        part1=part1,
        next_url=next_url,
        part2=part2,
        combined_code=combined,
        message=message,
    )


def execute_handshake(
    config: HandshakeConfig,
    transport: HttpTransport,
    sink: ResultSink,
    hooks: PipelineHooks | None = None,
) -> HandshakeResult | None:
    """Outermost boundary: every handshake error is reported through `sink`.

    Returns the result on success and `None` on failure.
    """

    try:
        result = run_handshake(config, transport, hooks)
    except HandshakeError as exc:
        sink.failure(f"Error: {exc}")
        return None

    sink.success(result.message)
    return result
