from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.domain.errors import ExternalApiError, MalformedJsonError
from core.domain.models import RestaurantResult
from core.domain.schema import validate_search_command
from core.services.search_orchestrator import SearchOrchestrator
from tests.conftest import StubPlaces, StubTranslator

COMMAND = validate_search_command(
    {"action": "restaurant_search", "parameters": {"query": "pizza", "near": "New York"}}
)
RESULTS = [
    RestaurantResult(
        fsq_place_id="12345",
        name="Pizza Palace",
        address="123 Main St, New York, NY",
        cuisine="Pizza, Italian",
    )
]


def _client(settings, *, translator=None, places=None) -> TestClient:
    orchestrator = SearchOrchestrator(
        translator=translator or StubTranslator(COMMAND),
        places=places or StubPlaces(RESULTS),
    )
    return TestClient(create_app(settings, orchestrator))


def test_execute_success_envelope(settings) -> None:
    with _client(settings) as client:
        response = client.get("/api/v1/execute", params={"message": "pizza in NYC", "code": "test-secret-code"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {
            "response": [
                {
                    "fsq_place_id": "12345",
                    "name": "Pizza Palace",
                    "address": "123 Main St, New York, NY",
                    "cuisine": "Pizza, Italian",
                }
            ]
        },
    }
    assert response.headers["RateLimit-Limit"] == "3"
    assert response.headers["RateLimit-Remaining"] == "2"


@pytest.mark.parametrize("params", [{"message": "pizza"}, {"message": "pizza", "code": "wrong"}, {"message": "pizza", "code": ""}])
def test_execute_rejects_missing_or_wrong_code(settings, params) -> None:
    translator = StubTranslator(COMMAND)
    with _client(settings, translator=translator) as client:
        response = client.get("/api/v1/execute", params=params)

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized", "message": "Invalid or missing access code"}
    assert translator.messages == []


def test_execute_rejects_everything_when_no_code_is_configured(settings) -> None:
    unconfigured = settings.model_copy(update={"endpoint_secret_code": None})
    with _client(unconfigured) as client:
        response = client.get("/api/v1/execute", params={"message": "pizza", "code": "anything"})

    assert response.status_code == 401


@pytest.mark.parametrize("params", [{"code": "test-secret-code"}, {"code": "test-secret-code", "message": "   "}])
def test_execute_requires_message(settings, params) -> None:
    with _client(settings) as client:
        response = client.get("/api/v1/execute", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": "Bad Request", "message": "Missing or invalid 'message' parameter"}


@pytest.mark.parametrize(
    "translator, places, message",
    [
        (StubTranslator(error=MalformedJsonError()), None, "Failed to parse LLM response as JSON"),
        (None, StubPlaces(error=ExternalApiError("Foursquare API error: Invalid API key")), "Foursquare API error: Invalid API key"),
    ],
)
def test_pipeline_errors_become_500(settings, translator, places, message) -> None:
    with _client(settings, translator=translator, places=places) as client:
        response = client.get("/api/v1/execute", params={"message": "pizza", "code": "test-secret-code"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error", "message": message}


def test_execute_is_rate_limited(settings) -> None:
    limited = settings.model_copy(update={"rate_limit_max_requests": 2})
    params = {"message": "pizza", "code": "test-secret-code"}
    with _client(limited) as client:
        statuses = [client.get("/api/v1/execute", params=params).status_code for _ in range(2)]
        blocked = client.get("/api/v1/execute", params=params)

    assert statuses == [200, 200]
    assert blocked.status_code == 429
    assert blocked.json() == {"error": "Too Many Requests", "message": "Too many requests, please try again later."}
    assert blocked.headers["RateLimit-Remaining"] == "0"
    assert int(blocked.headers["Retry-After"]) > 0


def test_rate_limit_counts_unauthorized_requests(settings) -> None:
    limited = settings.model_copy(update={"rate_limit_max_requests": 1})
    with _client(limited) as client:
        first = client.get("/api/v1/execute", params={"message": "pizza", "code": "wrong"})
        second = client.get("/api/v1/execute", params={"message": "pizza", "code": "test-secret-code"})

    assert first.status_code == 401
    assert first.headers["RateLimit-Remaining"] == "0"
    assert second.status_code == 429


def test_restaurants_placeholder(settings) -> None:
    with _client(settings) as client:
        response = client.get("/api/v1/restaurants")

    assert response.status_code == 200
    assert response.json() == {"message": "Restaurants endpoint", "data": []}


async def test_error_handler_builds_envelope_with_extra_headers() -> None:
    from types import SimpleNamespace

    from api.errors import ApiError, api_error_handler

    request = SimpleNamespace(state=SimpleNamespace(rate_limit_headers={"RateLimit-Limit": "3"}))
    response = await api_error_handler(request, ApiError(418, "Teapot", "short and stout", {"X-Extra": "1"}))  # type: ignore[arg-type]

    assert response.status_code == 418
    assert response.body == b'{"error":"Teapot","message":"short and stout"}'
    assert response.headers["RateLimit-Limit"] == "3"
    assert response.headers["X-Extra"] == "1"
