"""Task payload schemas shared by the API, services, and stores.

`TaskRecord` is the validated in-memory task and also the wire representation:
python attributes are snake_case, JSON keys are the camelCase aliases the web
client sends (`projectId`, `estimatedHours`, ...). Missing optional fields
are defaulted, unknown keys are ignored.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Literal, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TaskType = Literal["task", "milestone"]
TaskStatus = Literal["not_started", "in_progress", "completed", "on_hold"]
TaskPriority = Literal["low", "medium", "high", "critical"]

TASK_STATUSES: tuple[str, ...] = ("not_started", "in_progress", "completed", "on_hold")
TASK_PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "critical")
TASK_TYPES: tuple[str, ...] = ("task", "milestone")

DEFAULT_PROJECT_ID = "default"
DEFAULT_TASK_COLOR = "#4A90D9"
DEFAULT_TASK_NAME = "New Task"
DEFAULT_CATEGORY = "general"
DEFAULT_ESTIMATED_HOURS = 8.0
SCHEDULE_STAGING = "soon"

# Fields that may be cleared by sending an explicit `null`.
NULLABLE_TASK_FIELDS = frozenset({"parent_id", "scheduled_date", "reminder_time", "recurring"})


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _check_scheduled_date(value: str | None) -> str | None:
    if value is None or value == SCHEDULE_STAGING:
        return value
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        msg = "scheduledDate must be null, 'soon', or an ISO date"
        raise ValueError(msg) from exc


class TaskRecord(BaseModel):
    """A stored task, validated and with every default applied."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = DEFAULT_TASK_NAME
    description: str = ""
    start: date
    end: date
    progress: int = Field(default=0, ge=0, le=100)
    type: TaskType = "task"
    status: TaskStatus = "not_started"
    priority: TaskPriority = "medium"
    category: str = DEFAULT_CATEGORY
    color: str = DEFAULT_TASK_COLOR
    project_id: str = Field(default=DEFAULT_PROJECT_ID, alias="projectId")
    parent_id: str | None = Field(default=None, alias="parentId")
    dependencies: list[str] = Field(default_factory=list)
    assignee: str = ""
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float = Field(default=DEFAULT_ESTIMATED_HOURS, ge=0, alias="estimatedHours")
    actual_hours: float = Field(default=0, ge=0, alias="actualHours")
    scheduled_date: str | None = Field(default=None, alias="scheduledDate")
    reminder_time: str | None = Field(default=None, alias="reminderTime")
    reminder_enabled: bool = Field(default=False, alias="reminderEnabled")
    due_reminder: bool = Field(default=True, alias="dueReminder")
    recurring: dict[str, Any] | None = None

    @field_validator("tags", "dependencies")
    @classmethod
    def _unique_ids(cls, value: list[str]) -> list[str]:
        return _dedupe(value)

    @field_validator("scheduled_date")
    @classmethod
    def _valid_schedule(cls, value: str | None) -> str | None:
        return _check_scheduled_date(value)

    @model_validator(mode="after")
    def _milestone_is_single_day(self) -> Self:
        if self.type == "milestone":
            self.end = self.start
        return self

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)


class TaskFields(BaseModel):
    """Optional task fields accepted on create and partial update."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    description: str | None = None
    start: date | None = None
    end: date | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    type: TaskType | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    category: str | None = None
    color: str | None = None
    project_id: str | None = Field(default=None, alias="projectId")
    parent_id: str | None = Field(default=None, alias="parentId")
    dependencies: list[str] | None = None
    assignee: str | None = None
    tags: list[str] | None = None
    estimated_hours: float | None = Field(default=None, ge=0, alias="estimatedHours")
    actual_hours: float | None = Field(default=None, ge=0, alias="actualHours")
    scheduled_date: str | None = Field(default=None, alias="scheduledDate")
    reminder_time: str | None = Field(default=None, alias="reminderTime")
    reminder_enabled: bool | None = Field(default=None, alias="reminderEnabled")
    due_reminder: bool | None = Field(default=None, alias="dueReminder")
    recurring: dict[str, Any] | None = None

    @field_validator("scheduled_date")
    @classmethod
    def _valid_schedule(cls, value: str | None) -> str | None:
        return _check_scheduled_date(value)

    def changes(self) -> dict[str, Any]:
        """Return explicitly supplied fields, dropping nulls that cannot be cleared."""
        supplied = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in supplied.items()
            if value is not None or key in NULLABLE_TASK_FIELDS
        }


class TaskCreate(TaskFields):
    """Payload for creating a task; the server fills every omitted field."""


class TaskUpdate(TaskFields):
    """Payload for a shallow partial update of one task."""


class TaskBulkUpdateItem(TaskFields):
    """One element of a per-task bulk update, addressed by id."""

    id: str


class TaskBatchUpdate(BaseModel):
    """Apply the same partial update to every listed task id."""

    ids: list[str] = Field(default_factory=list)
    updates: TaskUpdate = Field(default_factory=TaskUpdate)


class TimeLogCreate(BaseModel):
    """Hours of work to add to a task's actual hours."""

    hours: float = Field(default=0, ge=0)


class AutoMoveResult(BaseModel):
    """Outcome of the auto-move scheduling pass."""

    moved: int
    tasks: list[TaskRecord]
