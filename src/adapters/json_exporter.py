"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite guardar una búsqueda sin depender del render de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import SearchResponse


def export_search_json(*, result: SearchResponse, output_path: Path) -> Path:
    """Exporta `SearchResponse` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
