"""Task CRUD, batch edits, time logging, and auto-scheduling endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from taskflow.api.deps import TASK_SERVICE_DEP
from taskflow.schemas.tasks import (
    AutoMoveResult,
    TaskBatchUpdate,
    TaskBulkUpdateItem,
    TaskCreate,
    TaskRecord,
    TaskUpdate,
    TimeLogCreate,
)
from taskflow.services.tasks import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskRecord])
async def list_tasks(service: TaskService = TASK_SERVICE_DEP) -> list[TaskRecord]:
    """Return every task in stored order."""
    return await service.list_tasks()


@router.post("", response_model=TaskRecord, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    service: TaskService = TASK_SERVICE_DEP,
) -> TaskRecord:
    """Create a task; omitted fields are defaulted or classified from its text."""
    return await service.create_task(payload)


@router.put("", response_model=list[TaskRecord])
async def bulk_update_tasks(
    payload: list[TaskBulkUpdateItem],
    service: TaskService = TASK_SERVICE_DEP,
) -> list[TaskRecord]:
    """Apply per-task partial updates addressed by id."""
    return await service.bulk_update(payload)


@router.put("/batch", response_model=list[TaskRecord])
async def batch_update_tasks(
    payload: TaskBatchUpdate,
    service: TaskService = TASK_SERVICE_DEP,
) -> list[TaskRecord]:
    """Apply the same partial update to every listed id; unknown ids are skipped."""
    return await service.batch_update(payload.ids, payload.updates)


@router.post("/auto-move", response_model=AutoMoveResult)
async def auto_move_tasks(service: TaskService = TASK_SERVICE_DEP) -> AutoMoveResult:
    """Schedule overdue and active backlog work into today or staging."""
    return await service.auto_move()


@router.get("/{task_id}", response_model=TaskRecord)
async def get_task(task_id: str, service: TaskService = TASK_SERVICE_DEP) -> TaskRecord:
    return await service.get_task(task_id)


@router.put("/{task_id}", response_model=TaskRecord)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    service: TaskService = TASK_SERVICE_DEP,
) -> TaskRecord:
    """Shallow-merge the supplied fields over the stored task."""
    return await service.update_task(task_id, payload)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, service: TaskService = TASK_SERVICE_DEP) -> None:
    """Delete a task, its children, and references to it in dependency lists."""
    await service.delete_task(task_id)


@router.post("/{task_id}/log-time", response_model=TaskRecord)
async def log_task_time(
    task_id: str,
    payload: TimeLogCreate,
    service: TaskService = TASK_SERVICE_DEP,
) -> TaskRecord:
    return await service.log_time(task_id, payload.hours)
