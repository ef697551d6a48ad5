"""Append-only task activity log table."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from taskflow.core.time import utcnow

RUNTIME_ANNOTATION_TYPES = (datetime,)


class ActivityLogEntry(SQLModel, table=True):
    """One task lifecycle event."""

    __tablename__ = "activity_log"  # pyright: ignore[reportAssignmentType]

    id: str = Field(primary_key=True)
    action: str = Field(index=True)
    task_id: str | None = Field(default=None, index=True)
    task_name: str | None = None
    details: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(), index=True)
