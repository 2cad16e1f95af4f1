"""Contrato del traductor lenguaje natural -> comando.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- Cualquier proveedor LLM (o un stub en tests) sirve si cumple `translate`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import SearchCommand


@runtime_checkable
class CommandTranslator(Protocol):
    """Convierte un mensaje libre en un `SearchCommand` validado.

    Reglas de diseño:
    - `translate` es asíncrono porque hace I/O (LLM).
    - Nunca devuelve un comando sin pasar por la puerta de validación.
    """

    async def translate(self, message: str) -> SearchCommand:
        ...
