"""Rule-based alerts derived from the current task collection."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import TYPE_CHECKING

from taskflow.schemas.ai import SuggestionRead

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from taskflow.schemas.tasks import TaskRecord

URGENT_PRIORITIES = frozenset({"critical", "high"})
HEAVY_WORKLOAD_THRESHOLD = 10
WORKLOAD_WINDOW = timedelta(days=7)
# Hours assumed for tasks without an estimate in the remaining-work summary.
UNESTIMATED_TASK_HOURS = 2.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return math.floor(value + 0.5)


def format_hours(value: float) -> str:
    """Render hours without a trailing `.0` for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def is_open(task: TaskRecord) -> bool:
    return task.status != "completed"


def is_overdue(task: TaskRecord, today: date) -> bool:
    return task.end < today and is_open(task)


def is_due_today(task: TaskRecord, today: date) -> bool:
    return task.end == today and is_open(task)


def _ids(tasks: Sequence[TaskRecord]) -> list[str]:
    return [task.id for task in tasks]


def _summary(tasks: Sequence[TaskRecord]) -> list[SuggestionRead]:
    if not tasks:
        return [
            SuggestionRead(
                type="info",
                title="Getting Started",
                message="Add your first task to get AI-powered insights and suggestions.",
            ),
        ]
    total = len(tasks)
    completed = [task for task in tasks if not is_open(task)]
    pending = total - len(completed)
    total_hours = sum(task.estimated_hours or UNESTIMATED_TASK_HOURS for task in tasks)
    completed_hours = sum(task.estimated_hours or UNESTIMATED_TASK_HOURS for task in completed)
    completion_rate = round_half_up(len(completed) / total * 100)
    summary = [
        SuggestionRead(
            type="info",
            title="Progress Summary",
            message=(
                f"{len(completed)}/{total} tasks done ({completion_rate}%). {pending} remaining."
            ),
        ),
    ]
    if pending > 0:
        remaining_hours = total_hours - completed_hours
        average = round_half_up(remaining_hours / pending)
        summary.append(
            SuggestionRead(
                type="suggestion",
                title="Time Estimate",
                message=(
                    f"~{format_hours(remaining_hours)}h of work remaining (avg {average}h/task)"
                ),
            ),
        )
    return summary


def generate_suggestions(tasks: Sequence[TaskRecord], today: date) -> list[SuggestionRead]:
    """Return alerts in fixed order, or a progress summary when no alert applies.

    Overdue, due-today, unstarted high priority, and stalled checks are
    independent; each one that matches contributes one entry. A heavy
    workload warning follows them but does not suppress the summary.
    """
    suggestions: list[SuggestionRead] = []

    overdue = [task for task in tasks if is_overdue(task, today)]
    if overdue:
        suggestions.append(
            SuggestionRead(
                type="warning",
                title="Overdue Tasks",
                message=f"You have {len(overdue)} overdue task(s) that need attention",
                action="filter_overdue",
                tasks=_ids(overdue),
            ),
        )

    due_today = [task for task in tasks if is_due_today(task, today)]
    if due_today:
        suggestions.append(
            SuggestionRead(
                type="info",
                title="Due Today",
                message=f"{len(due_today)} task(s) are due today",
                action="filter_today",
                tasks=_ids(due_today),
            ),
        )

    unstarted = [
        task
        for task in tasks
        if task.priority in URGENT_PRIORITIES and task.status == "not_started"
    ]
    if unstarted:
        suggestions.append(
            SuggestionRead(
                type="suggestion",
                title="Priority Tasks",
                message=f"{len(unstarted)} high priority task(s) haven't been started",
                action="filter_priority",
                tasks=_ids(unstarted),
            ),
        )

    stalled = [task for task in tasks if task.status == "in_progress" and task.progress == 0]
    if stalled:
        suggestions.append(
            SuggestionRead(
                type="suggestion",
                title="Stalled Tasks",
                message=f"{len(stalled)} task(s) marked as in progress but have 0% completion",
                action="filter_stalled",
                tasks=_ids(stalled),
            ),
        )

    needs_summary = not suggestions

    # Open work ending within the week, overdue tasks included.
    week_end = today + WORKLOAD_WINDOW
    this_week = [task for task in tasks if is_open(task) and task.end <= week_end]
    if len(this_week) > HEAVY_WORKLOAD_THRESHOLD:
        suggestions.append(
            SuggestionRead(
                type="warning",
                title="Heavy Workload",
                message=(
                    f"You have {len(this_week)} tasks due this week. Consider redistributing."
                ),
                action="view_week",
            ),
        )

    if needs_summary:
        suggestions.extend(_summary(tasks))
    return suggestions
