"""Activity feed endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Query

from taskflow.api.deps import ACTIVITY_DEP
from taskflow.schemas.activity import ActivityEntryRead
from taskflow.services.activity import DEFAULT_ACTIVITY_LIMIT, ActivityLog

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=list[ActivityEntryRead])
async def list_activity(
    limit: int = Query(default=DEFAULT_ACTIVITY_LIMIT, ge=1),
    activity: ActivityLog = ACTIVITY_DEP,
) -> list[ActivityEntryRead]:
    """Return the newest `limit` activity entries."""
    return await activity.recent(limit)
