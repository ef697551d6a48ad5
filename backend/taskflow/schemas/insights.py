"""Schemas for aggregate statistics and the dashboard."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from taskflow.schemas.activity import ActivityEntryRead
from taskflow.schemas.ai import SuggestionRead
from taskflow.schemas.tasks import TaskRecord


class StatsRead(BaseModel):
    """Counts and totals across the whole task collection."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    by_status: dict[str, int] = Field(alias="byStatus")
    by_priority: dict[str, int] = Field(alias="byPriority")
    by_category: dict[str, int] = Field(alias="byCategory")
    by_type: dict[str, int] = Field(alias="byType")
    overdue: int
    due_today: int = Field(alias="dueToday")
    due_this_week: int = Field(alias="dueThisWeek")
    avg_progress: int = Field(alias="avgProgress")
    completion_rate: int = Field(alias="completionRate")
    total_estimated_hours: float = Field(alias="totalEstimatedHours")
    total_actual_hours: float = Field(alias="totalActualHours")
    velocity: int


class CategoryProgress(BaseModel):
    """Completion figures for one category."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    completed: int = 0
    progress: int = 0
    avg_progress: int = Field(default=0, alias="avgProgress")


class DashboardRead(BaseModel):
    """Everything the dashboard view renders in one payload."""

    model_config = ConfigDict(populate_by_name=True)

    recent_activity: list[ActivityEntryRead] = Field(alias="recentActivity")
    upcoming: list[TaskRecord]
    overdue: list[TaskRecord]
    category_progress: dict[str, CategoryProgress] = Field(alias="categoryProgress")
    suggestions: list[SuggestionRead]
    todays_tasks: list[TaskRecord] = Field(alias="todaysTasks")
