"""Task table in storage naming (`start_date`, `project_id`, ...)."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from taskflow.core.time import utcnow

RUNTIME_ANNOTATION_TYPES = (date, datetime)


class Task(SQLModel, table=True):
    """Stored task row; `position` keeps the collection order across snapshots."""

    __tablename__ = "tasks"  # pyright: ignore[reportAssignmentType]

    id: str = Field(primary_key=True)
    position: int = Field(default=0, index=True)

    name: str
    description: str = ""
    start_date: date
    end_date: date
    progress: int = 0
    type: str = "task"
    status: str = Field(default="not_started", index=True)
    priority: str = Field(default="medium", index=True)
    category: str = "general"
    color: str = "#4A90D9"
    project_id: str = Field(index=True)
    parent_id: str | None = Field(default=None, index=True)
    dependencies: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    assignee: str = ""
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    estimated_hours: float = 8
    actual_hours: float = 0
    scheduled_date: str | None = None
    reminder_time: str | None = None
    reminder_enabled: bool = False
    due_reminder: bool = True
    recurring: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
