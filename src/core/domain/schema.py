"""Puerta de validación del comando de búsqueda.

Todo JSON que llega desde fuera (incluida la salida del LLM) pasa por aquí:
no hay confianza implícita entre datos "generados por IA" y datos de usuario.
"""

from __future__ import annotations

import pydantic

from core.domain.errors import CommandValidationError
from core.domain.models import SearchCommand


def format_violations(exc: pydantic.ValidationError) -> list[str]:
    """Convierte los errores de Pydantic en `"<campo>: <motivo>"`."""

    out: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
        out.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return out


def validate_search_command(raw: object) -> SearchCommand:
    """Valida y normaliza `raw` como `SearchCommand`.

    Raises:
        CommandValidationError: con la lista de violaciones por campo.
    """

    try:
        return SearchCommand.model_validate(raw)
    except pydantic.ValidationError as exc:
        violations = format_violations(exc)
        raise CommandValidationError(
            f"Invalid search command: {'; '.join(violations)}",
            violations,
        ) from exc
