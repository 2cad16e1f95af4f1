"""Search orchestration.

`SearchOrchestrator` is the single seam the HTTP and CLI layers depend on:
translate the message, then search with the resulting parameters. It adds no
logic of its own and converts no errors; whatever the translator or the places
adapter raises reaches the caller unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from adapters.foursquare_places import FoursquarePlacesAdapter
from adapters.llm_translator import OpenAITranslator
from core.config import AppSettings
from core.domain.models import SearchResponse
from core.interfaces import CommandTranslator, PlacesSearcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOrchestrator:
    """Composes a translator and a places searcher."""

    translator: CommandTranslator
    places: PlacesSearcher

    async def execute(self, message: str) -> SearchResponse:
        command = await self.translator.translate(message)
        results = await self.places.search(command.parameters)
        logger.info("Search for %r produced %d results", message, len(results))
        return SearchResponse(response=results)


def build_search_orchestrator(settings: AppSettings | None = None) -> SearchOrchestrator:
    """Wire the default adapters; call once per process and pass the result around."""

    settings = settings or AppSettings()
    return SearchOrchestrator(
        translator=OpenAITranslator(settings),
        places=FoursquarePlacesAdapter(settings),
    )
