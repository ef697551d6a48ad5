"""Store connectivity probe."""

from __future__ import annotations

from fastapi import APIRouter

from taskflow.api.deps import STORE_DEP
from taskflow.core.logging import get_logger
from taskflow.db.store import TaskflowStore
from taskflow.schemas.health import StoreHealthResponse
from taskflow.services.exceptions import StoreUnavailableError

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get("/health", response_model=StoreHealthResponse)
async def store_health(store: TaskflowStore = STORE_DEP) -> StoreHealthResponse:
    """Report whether the configured store answers a read probe."""
    try:
        await store.ping()
    except StoreUnavailableError as exc:
        logger.warning("health.store.unreachable", extra={"error": exc.detail})
        return StoreHealthResponse(database="error")
    return StoreHealthResponse(database="connected")
