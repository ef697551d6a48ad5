"""Auto-move: pull due and overdue work into today or the staging column."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskflow.schemas.tasks import SCHEDULE_STAGING
from taskflow.services.suggestions import URGENT_PRIORITIES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from taskflow.schemas.tasks import TaskRecord


def _target_slot(task: TaskRecord, today: date) -> str | None:
    """Return the slot `task` should move to, or `None` to leave it alone."""
    if task.status == "completed":
        return None
    today_slot = today.isoformat()
    overdue = task.end < today and task.scheduled_date != today_slot
    active_backlog = task.scheduled_date is None and task.start <= today <= task.end
    if not (overdue or active_backlog):
        return None
    return today_slot if task.priority in URGENT_PRIORITIES else SCHEDULE_STAGING


def plan_auto_move(tasks: Sequence[TaskRecord], today: date) -> tuple[list[TaskRecord], int]:
    """Return the rescheduled collection and how many tasks changed slot.

    Overdue tasks and backlog tasks whose date range covers `today` are
    scheduled for today when critical/high priority, otherwise staged as
    `"soon"`.
    """
    moved = 0
    result: list[TaskRecord] = []
    for task in tasks:
        slot = _target_slot(task, today)
        if slot is None or slot == task.scheduled_date:
            result.append(task)
            continue
        result.append(task.model_copy(update={"scheduled_date": slot}))
        moved += 1
    return result, moved
