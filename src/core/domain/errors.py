"""Taxonomía de errores del pipeline de búsqueda.

Por qué una jerarquía propia:
- Permite que la capa HTTP/CLI distinga "el modelo devolvió basura" de
  "el modelo devolvió campos inválidos" o "Foursquare rechazó la petición".
- Ningún error se suprime: todos se propagan hasta el llamador.
"""

from __future__ import annotations


class SearchPipelineError(Exception):
    """Base de todos los errores de dominio del pipeline."""


class EmptyResponseError(SearchPipelineError):
    """El LLM no devolvió contenido."""

    def __init__(self, message: str = "No response from LLM") -> None:
        super().__init__(message)


class MalformedJsonError(SearchPipelineError):
    """El contenido del LLM no es JSON parseable."""

    def __init__(self, message: str = "Failed to parse LLM response as JSON") -> None:
        super().__init__(message)


class CommandValidationError(SearchPipelineError):
    """El JSON no cumple el esquema del comando.

    `violations` conserva el detalle por campo (`"parameters.near: Field required"`).
    """

    def __init__(self, message: str, violations: list[str] | None = None) -> None:
        super().__init__(message)
        self.violations: list[str] = list(violations or [])


class ExternalApiError(SearchPipelineError):
    """La API de lugares respondió con un error estructurado."""
