"""Schemas for undo/redo history."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskflow.core.time import utcnow
from taskflow.schemas.tasks import TaskRecord


class HistoryEntry(BaseModel):
    """A task-collection snapshot taken before a mutating action."""

    action: str
    state: list[dict[str, Any]] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=utcnow)


class HistoryState(BaseModel):
    """Both history stacks, oldest entry first."""

    model_config = ConfigDict(populate_by_name=True)

    undo_stack: list[HistoryEntry] = Field(default_factory=list, alias="undoStack")
    redo_stack: list[HistoryEntry] = Field(default_factory=list, alias="redoStack")


class HistoryStatusRead(BaseModel):
    """Availability flags for undo and redo."""

    model_config = ConfigDict(populate_by_name=True)

    can_undo: bool = Field(alias="canUndo")
    can_redo: bool = Field(alias="canRedo")


class UndoRedoRead(HistoryStatusRead):
    """Restored task collection plus refreshed availability flags."""

    tasks: list[TaskRecord]
