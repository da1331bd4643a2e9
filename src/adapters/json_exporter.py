"""Exportación JSON del resultado.

Por qué JSON:
- Deja constancia de los fragmentos y del código combinado, no solo del
  mensaje final que se ve en consola.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import HandshakeResult


def export_result_json(*, result: HandshakeResult, output_path: Path) -> Path:
    """Exporta `HandshakeResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
