from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings
from core.domain.models import RestaurantResult, SearchCommand, SearchParameters

FSQ_BASE_URL = "https://test-fsq-api.example"


class FakeCompletions:
    def __init__(self, content: str | None = None, *, error: Exception | None = None, empty: bool = False) -> None:
        self.content = content
        self.error = error
        self.empty = empty
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.empty:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


class FakeChatClient:
    """Mismo shape que `AsyncOpenAI` para `chat.completions.create`."""

    def __init__(self, content: str | None = None, **kwargs: Any) -> None:
        self.completions = FakeCompletions(content, **kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


class StubTranslator:
    def __init__(self, command: SearchCommand | None = None, error: Exception | None = None) -> None:
        self.command = command
        self.error = error
        self.messages: list[str] = []

    async def translate(self, message: str) -> SearchCommand:
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        assert self.command is not None
        return self.command


class StubPlaces:
    def __init__(self, results: list[RestaurantResult] | None = None, error: Exception | None = None) -> None:
        self.results = results or []
        self.error = error
        self.calls: list[SearchParameters] = []

    async def search(self, params: SearchParameters) -> list[RestaurantResult]:
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        ai_api_key="test-openai-key",
        ai_model="gpt-4o-mini",
        fsq_api_key="test-fsq-key",
        fsq_places_base_url=FSQ_BASE_URL,
        endpoint_secret_code="test-secret-code",
        log_dir="",
    )


@pytest.fixture
def llm_json() -> Callable[[dict[str, Any]], str]:
    return lambda payload: json.dumps(payload)


@pytest.fixture
def pizza_places_payload() -> dict[str, Any]:
    return {
        "results": [
            {
                "fsq_place_id": "12345",
                "name": "Pizza Palace",
                "location": {
                    "address": "123 Main St",
                    "locality": "New York",
                    "region": "NY",
                    "formatted_address": "123 Main St, New York, NY 10001",
                },
                "categories": [
                    {"fsq_category_id": "c1", "name": "Pizzeria", "short_name": "Pizza", "plural_name": "Pizzerias"},
                    {
                        "fsq_category_id": "c2",
                        "name": "Italian Restaurant",
                        "short_name": "Italian",
                        "plural_name": "Italian Restaurants",
                    },
                ],
            },
            {
                "fsq_place_id": "67890",
                "name": "Joe's Pizza",
                "location": {"formatted_address": "7 Carmine St, New York, NY 10014"},
                "categories": [{"fsq_category_id": "c1", "name": "Pizzeria", "short_name": "Pizza"}],
            },
        ]
    }


class RecordingTransport:
    """`httpx.MockTransport` que guarda las peticiones recibidas."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        self.transport = httpx.MockTransport(_handle)


@pytest.fixture
def fsq_json_transport() -> Callable[..., RecordingTransport]:
    def _make(payload: Any, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))

    return _make
