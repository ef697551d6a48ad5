"""Undo/redo endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from taskflow.api.deps import HISTORY_DEP, TASK_SERVICE_DEP
from taskflow.schemas.history import HistoryStatusRead, UndoRedoRead
from taskflow.services.history import HistoryLog
from taskflow.services.tasks import TaskService

router = APIRouter(tags=["history"])


@router.post("/undo", response_model=UndoRedoRead)
async def undo(service: TaskService = TASK_SERVICE_DEP) -> UndoRedoRead:
    """Restore the task collection as it was before the last recorded action."""
    return await service.undo()


@router.post("/redo", response_model=UndoRedoRead)
async def redo(service: TaskService = TASK_SERVICE_DEP) -> UndoRedoRead:
    """Re-apply the most recently undone action."""
    return await service.redo()


@router.get("/history", response_model=HistoryStatusRead)
async def history_status(history: HistoryLog = HISTORY_DEP) -> HistoryStatusRead:
    return await history.status()
