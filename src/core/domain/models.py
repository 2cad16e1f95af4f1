"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Facilita la normalización de los registros heterogéneos de Foursquare.

Nota:
- `SearchCommand`/`SearchParameters` son inmutables: se construyen una vez por
  petición y se descartan tras la búsqueda.
"""

from __future__ import annotations

from typing import Any, Literal, get_args

from pydantic import BaseModel, Field, StrictBool, StrictStr, field_validator, model_validator
from pydantic.config import ConfigDict

SEARCH_ACTION = "restaurant_search"

PriceLevel = Literal[1, 2, 3, 4]
SortOrder = Literal["RELEVANCE", "RATING", "DISTANCE", "POPULARITY"]

PRICE_LEVELS: tuple[int, ...] = get_args(PriceLevel)
SORT_ORDERS: tuple[str, ...] = get_args(SortOrder)
DEFAULT_SORT: SortOrder = "RELEVANCE"


class SearchParameters(BaseModel):
    """Parámetros de búsqueda extraídos del mensaje del usuario.

    Reglas:
    - Sin coerción de tipos: `"2"` no es un precio y `"true"` no es un booleano.
    - Los opcionales se omiten, no se envían como `null`.
    - `sort` ausente se normaliza a `RELEVANCE`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    query: StrictStr = Field(
        ...,
        min_length=1,
        description="Tipo de cocina o nombre del restaurante.",
    )
    near: StrictStr = Field(
        ...,
        min_length=1,
        description="Ubicación en texto libre (ciudad, barrio, dirección).",
    )
    min_price: PriceLevel | None = Field(
        default=None,
        description="Nivel de precio mínimo (1=barato .. 4=muy caro).",
    )
    max_price: PriceLevel | None = Field(
        default=None,
        description="Nivel de precio máximo (1=barato .. 4=muy caro).",
    )
    open_now: StrictBool | None = Field(
        default=None,
        description="Solo lugares abiertos (true) o cerrados (false) ahora mismo.",
    )
    sort: SortOrder = Field(
        default=DEFAULT_SORT,
        description="Criterio de ordenación de Foursquare.",
    )

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _price_must_be_int(cls, value: Any) -> Any:
        # bool es subclase de int: lo excluimos explícitamente.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"price level must be one of {list(PRICE_LEVELS)}, got {value!r}")
        return value

    @field_validator("open_now", mode="before")
    @classmethod
    def _open_now_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must be omitted instead of null")
        return value

    @field_validator("sort", mode="before")
    @classmethod
    def _sort_must_be_str(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError(f"sort must be one of {list(SORT_ORDERS)}, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_price_range(self) -> "SearchParameters":
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError(
                f"min_price ({self.min_price}) must be less than or equal to max_price ({self.max_price})"
            )
        return self

    def to_query_params(self) -> dict[str, Any]:
        """Parámetros tal cual, sin los campos omitidos."""

        return self.model_dump(exclude_none=True)


class SearchCommand(BaseModel):
    """Comando estructurado producido por la traducción: `{action, parameters}`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    action: Literal["restaurant_search"] = Field(
        ...,
        description="Discriminador fijo del comando.",
    )
    parameters: SearchParameters

    @field_validator("action", mode="before")
    @classmethod
    def _action_must_be_str(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError(f"action must be '{SEARCH_ACTION}', got {value!r}")
        return value


class PlaceCategory(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fsq_category_id: str | None = None
    name: str | None = None
    short_name: str | None = None
    plural_name: str | None = None


class PlaceLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    address: str | None = None
    locality: str | None = None
    region: str | None = None
    postcode: str | None = None
    country: str | None = None
    formatted_address: str | None = None


class PlaceRecord(BaseModel):
    """Registro crudo de `/places/search` (solo los campos que pedimos)."""

    model_config = ConfigDict(extra="ignore")

    fsq_place_id: str | None = None
    name: str | None = None
    location: PlaceLocation | None = None
    categories: list[PlaceCategory] = Field(default_factory=list)


class RestaurantResult(BaseModel):
    """Forma normalizada que devolvemos a los llamadores."""

    fsq_place_id: str = Field(..., description="Identificador de Foursquare.")
    name: str = Field(..., description="Nombre del lugar.")
    address: str = Field(
        default="",
        description="Dirección formateada; vacía si Foursquare no trae ubicación.",
    )
    cuisine: str = Field(
        default="N/A",
        description="Categorías (short_name) separadas por coma, o 'N/A'.",
    )


class SearchResponse(BaseModel):
    """Resultado de `SearchOrchestrator.execute`."""

    response: list[RestaurantResult] = Field(default_factory=list)
