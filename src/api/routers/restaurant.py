import logging
from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import enforce_rate_limit, get_orchestrator, require_access_code
from api.errors import ApiError
from core.services.search_orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["restaurants"])


@router.get("/restaurants")
async def list_restaurants() -> dict[str, Any]:
    """Placeholder listing route"""
    return {"message": "Restaurants endpoint", "data": []}


@router.get("/execute", dependencies=[Depends(enforce_rate_limit), Depends(require_access_code)])
async def execute(
    message: str | None = None,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Translate a free-text message and search restaurants"""
    if not message or not message.strip():
        raise ApiError(400, "Bad Request", "Missing or invalid 'message' parameter")

    try:
        result = await orchestrator.execute(message)
    except Exception as exc:
        logger.error("Error executing restaurant search: %s", exc)
        raise ApiError(500, "Internal Server Error", str(exc) or "An unexpected error occurred") from exc

    return {"success": True, "data": result.model_dump(mode="json")}
