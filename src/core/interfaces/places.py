"""Contrato de búsqueda de lugares."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RestaurantResult, SearchParameters


@runtime_checkable
class PlacesSearcher(Protocol):
    """Ejecuta la búsqueda externa y devuelve resultados normalizados."""

    async def search(self, params: SearchParameters) -> list[RestaurantResult]:
        ...
