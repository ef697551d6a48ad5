"""Undo/redo stack rows holding task-collection snapshots."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from taskflow.core.time import utcnow

RUNTIME_ANNOTATION_TYPES = (datetime,)

UNDO_STACK = "undo"
REDO_STACK = "redo"


class HistoryRow(SQLModel, table=True):
    """One snapshot on the undo or redo stack, ordered by `position`."""

    __tablename__ = "history_entries"  # pyright: ignore[reportAssignmentType]

    id: int | None = Field(default=None, primary_key=True)
    stack: str = Field(index=True)
    position: int = 0
    action: str
    state: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
