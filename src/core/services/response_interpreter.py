"""Tolerant response interpretation.

The endpoint is not strict about field names, so every value is looked up
through an ordered alias list: the first alias present wins, later aliases are
ignored even when they are also present. Bodies that are not JSON objects fall
back to plain text where the workflow allows it.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping, Sequence

PART1_KEYS: tuple[str, ...] = ("part1", "code_part1", "first", "code1")
NEXT_URI_KEYS: tuple[str, ...] = ("uri", "next")
PART2_KEYS: tuple[str, ...] = ("part2", "code_part2", "second", "code2")
# Generic keys, consulted only when no PART2_KEYS alias matched.
PART2_FALLBACK_KEYS: tuple[str, ...] = ("code", "data")
MESSAGE_KEYS: tuple[str, ...] = ("message", "result", "msg")

EXCERPT_LIMIT = 400


def dumps_compact(value: Any) -> str:
    """JSON UTF-8 sin escapar unicode ni barras (`/`)."""

    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def excerpt(body: str, limit: int = EXCERPT_LIMIT) -> str:
    return body[:limit]


def decode_json(body: str | bytes | None) -> dict[str, Any] | None:
    """Decodifica un objeto JSON o devuelve `None`.

    Un cuerpo inválido no es un error: es la señal para usar el fallback de
    texto plano. Arrays y escalares tampoco cuentan como objeto.
    """

    if body is None:
        return None
    try:
        data = json.loads(body)
    except (TypeError, ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def extract_field(obj: Mapping[str, Any], aliases: Sequence[str]) -> Any | None:
    """Devuelve el valor del primer alias presente (un `null` cuenta como ausente)."""

    for key in aliases:
        value = obj.get(key)
        if value is not None:
            return value
    return None


def extract_part1(obj: Mapping[str, Any]) -> Any | None:
    return extract_field(obj, PART1_KEYS)


def extract_next_uri(obj: Mapping[str, Any], default: str) -> str:
    value = extract_field(obj, NEXT_URI_KEYS)
    return default if value is None else str(value)


def extract_part2(obj: Mapping[str, Any]) -> Any | None:
    value = extract_field(obj, PART2_KEYS)
    if value is None:
        value = extract_field(obj, PART2_FALLBACK_KEYS)
    return value


def extract_final_message(obj: Mapping[str, Any]) -> str:
    """Mensaje final; sin campo dedicado se devuelve el objeto entero como JSON."""

    value = extract_field(obj, MESSAGE_KEYS)
    if value is None:
        return dumps_compact(obj)
    return value if isinstance(value, str) else dumps_compact(value)


def fragment_from_body(body: str, extractor: Callable[[Mapping[str, Any]], Any]) -> Any | None:
    """Aplica `extractor` si el cuerpo es JSON; si no, usa el texto recortado."""

    obj = decode_json(body)
    if obj is None:
        return body.strip()
    return extractor(obj)
