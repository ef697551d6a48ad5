"""Aggregate statistics and the dashboard payload."""

from __future__ import annotations

from collections import Counter
from datetime import timedelta
from typing import TYPE_CHECKING

from taskflow.core.time import as_naive_utc
from taskflow.schemas.insights import CategoryProgress, DashboardRead, StatsRead
from taskflow.schemas.tasks import DEFAULT_CATEGORY, TASK_PRIORITIES, TASK_STATUSES, TASK_TYPES
from taskflow.services.suggestions import (
    generate_suggestions,
    is_due_today,
    is_open,
    is_overdue,
    round_half_up,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime

    from taskflow.schemas.activity import ActivityEntryRead
    from taskflow.schemas.tasks import TaskRecord

WEEK = timedelta(days=7)
RECENT_ACTIVITY_LIMIT = 10
COMPLETED_CHANGE = "status: completed"


def _counts(values: Sequence[str], keys: Sequence[str]) -> dict[str, int]:
    counter = Counter(values)
    return {key: counter.get(key, 0) for key in keys}


def completion_velocity(
    activities: Sequence[ActivityEntryRead],
    *,
    now: datetime,
) -> int:
    """Count completions recorded in the activity feed over the trailing week."""
    week_ago = as_naive_utc(now) - WEEK
    velocity = 0
    for entry in activities:
        if entry.action != "updated":
            continue
        changes = entry.details.get("changes") or []
        if COMPLETED_CHANGE in changes and as_naive_utc(entry.timestamp) >= week_ago:
            velocity += 1
    return velocity


def compute_stats(
    tasks: Sequence[TaskRecord],
    activities: Sequence[ActivityEntryRead],
    *,
    today: date,
    now: datetime,
) -> StatsRead:
    """Counts by status/priority/category/type plus due-date and effort totals."""
    total = len(tasks)
    week_end = today + WEEK
    completed = sum(1 for task in tasks if not is_open(task))
    return StatsRead(
        total=total,
        by_status=_counts([task.status for task in tasks], TASK_STATUSES),
        by_priority=_counts([task.priority for task in tasks], TASK_PRIORITIES),
        by_category=dict(Counter(task.category or DEFAULT_CATEGORY for task in tasks)),
        by_type=_counts([task.type for task in tasks], TASK_TYPES),
        overdue=sum(1 for task in tasks if is_overdue(task, today)),
        due_today=sum(1 for task in tasks if is_due_today(task, today)),
        due_this_week=sum(
            1 for task in tasks if is_open(task) and today < task.end <= week_end
        ),
        avg_progress=round_half_up(sum(task.progress for task in tasks) / total) if total else 0,
        completion_rate=round_half_up(completed / total * 100) if total else 0,
        total_estimated_hours=sum(task.estimated_hours for task in tasks),
        total_actual_hours=sum(task.actual_hours for task in tasks),
        velocity=completion_velocity(activities, now=now),
    )


def category_progress(tasks: Sequence[TaskRecord]) -> dict[str, CategoryProgress]:
    progress: dict[str, CategoryProgress] = {}
    for task in tasks:
        bucket = progress.setdefault(task.category or DEFAULT_CATEGORY, CategoryProgress())
        bucket.total += 1
        if not is_open(task):
            bucket.completed += 1
        bucket.progress += task.progress
    for bucket in progress.values():
        bucket.avg_progress = round_half_up(bucket.progress / bucket.total)
    return progress


def build_dashboard(
    tasks: Sequence[TaskRecord],
    activities: Sequence[ActivityEntryRead],
    *,
    today: date,
) -> DashboardRead:
    """Recent activity, upcoming and overdue work, category progress, and hints."""
    week_end = today + WEEK
    upcoming = sorted(
        (task for task in tasks if is_open(task) and today <= task.end <= week_end),
        key=lambda task: task.end,
    )
    overdue = sorted(
        (task for task in tasks if is_overdue(task, today)),
        key=lambda task: task.end,
    )
    return DashboardRead(
        recent_activity=list(activities[:RECENT_ACTIVITY_LIMIT]),
        upcoming=upcoming,
        overdue=overdue,
        category_progress=category_progress(tasks),
        suggestions=generate_suggestions(tasks, today),
        todays_tasks=[
            task for task in tasks if is_open(task) and task.start <= today <= task.end
        ],
    )
