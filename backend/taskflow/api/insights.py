"""Statistics and dashboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from taskflow.api.deps import ACTIVITY_DEP, TASK_SERVICE_DEP
from taskflow.core.time import utc_today, utcnow
from taskflow.schemas.insights import DashboardRead, StatsRead
from taskflow.services.activity import ActivityLog
from taskflow.services.insights import RECENT_ACTIVITY_LIMIT, build_dashboard, compute_stats
from taskflow.services.tasks import TaskService

router = APIRouter(tags=["insights"])


@router.get("/stats", response_model=StatsRead)
async def get_stats(
    service: TaskService = TASK_SERVICE_DEP,
    activity: ActivityLog = ACTIVITY_DEP,
) -> StatsRead:
    """Aggregate counts, due-date figures, effort totals, and weekly velocity."""
    now = utcnow()
    return compute_stats(
        await service.list_tasks(),
        await activity.recent(limit=None),
        today=now.date(),
        now=now,
    )


@router.get("/dashboard", response_model=DashboardRead)
async def get_dashboard(
    service: TaskService = TASK_SERVICE_DEP,
    activity: ActivityLog = ACTIVITY_DEP,
) -> DashboardRead:
    """Everything the dashboard view renders in one payload."""
    return build_dashboard(
        await service.list_tasks(),
        await activity.recent(RECENT_ACTIVITY_LIMIT),
        today=utc_today(),
    )
