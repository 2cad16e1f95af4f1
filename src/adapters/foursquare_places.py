"""Adaptador: Foursquare Places API (`GET /places/search`).

Implementación:
- Envía los parámetros del comando tal cual, más `limit=50` y una lista fija
  de `fields` para minimizar el payload.
- Normaliza cada lugar a `RestaurantResult`.

Notas:
- HTTP 4xx/5xx => `ExternalApiError("Foursquare API error: ...")`.
- Fallos de red (`httpx.RequestError`) se propagan sin envolver.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import ExternalApiError
from core.domain.models import PlaceRecord, RestaurantResult, SearchParameters

logger = logging.getLogger(__name__)

SEARCH_PATH = "/places/search"
RESULT_LIMIT = 50
RESULT_FIELDS = "fsq_place_id,name,location,categories"
NO_CUISINE = "N/A"


def normalize_place(place: PlaceRecord) -> RestaurantResult:
    address = ""
    if place.location is not None and place.location.formatted_address:
        address = place.location.formatted_address

    cuisine = NO_CUISINE
    if place.categories:
        cuisine = ", ".join(cat.short_name or "" for cat in place.categories)

    return RestaurantResult(
        fsq_place_id=place.fsq_place_id or "",
        name=place.name or "",
        address=address,
        cuisine=cuisine,
    )


def _api_error_message(exc: httpx.HTTPStatusError) -> str:
    """Mensaje del servidor si el cuerpo es JSON con `message`; si no, el de httpx."""

    try:
        body = exc.response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return str(exc)


class FoursquarePlacesAdapter:
    """Busca restaurantes en Foursquare y devuelve registros normalizados."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.fsq_api_key or ''}",
            "X-Places-Api-Version": self._settings.fsq_api_version,
        }

    def build_query_params(self, params: SearchParameters) -> dict[str, Any]:
        query = params.to_query_params()
        query["limit"] = RESULT_LIMIT
        query["fields"] = RESULT_FIELDS
        return query

    async def search(self, params: SearchParameters) -> list[RestaurantResult]:
        query = self.build_query_params(params)
        try:
            async with build_async_client(
                self._settings,
                base_url=self._settings.fsq_places_base_url,
                extra_headers=self._headers(),
                transport=self._transport,
            ) as client:
                response = await client.get(SEARCH_PATH, params=query)
                response.raise_for_status()
                payload = response.json()

            results = (payload.get("results") or []) if isinstance(payload, dict) else []
            places = [PlaceRecord.model_validate(item) for item in results]
        except httpx.HTTPStatusError as exc:
            logger.error("Error in FoursquarePlacesAdapter.search: %s", exc)
            raise ExternalApiError(f"Foursquare API error: {_api_error_message(exc)}") from exc
        except Exception as exc:
            logger.error("Error in FoursquarePlacesAdapter.search: %r", exc)
            raise

        logger.info("Foursquare returned %d places for query=%r near=%r", len(places), params.query, params.near)
        return [normalize_place(place) for place in places]
