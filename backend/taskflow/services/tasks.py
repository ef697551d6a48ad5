"""Task repository: CRUD, cascading delete, batch edits, and undo/redo.

Each mutation loads the whole collection, applies the change in memory,
writes the collection back, snapshots the prior state into history, and
appends an activity event.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

from taskflow.core.logging import get_logger
from taskflow.core.time import utc_today
from taskflow.schemas.history import HistoryStatusRead, UndoRedoRead
from taskflow.schemas.tasks import AutoMoveResult, TaskRecord
from taskflow.services import classifier
from taskflow.services.exceptions import NotFoundError
from taskflow.services.scheduling import plan_auto_move

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import date

    from taskflow.db.store import TaskflowStore
    from taskflow.schemas.tasks import TaskBulkUpdateItem, TaskCreate, TaskFields
    from taskflow.services.activity import ActivityLog
    from taskflow.services.history import HistoryLog

logger = get_logger(__name__)

DEFAULT_TASK_SPAN = timedelta(days=7)
TASK_NOT_FOUND = "Task not found"


def merge_task(task: TaskRecord, changes: dict[str, Any]) -> TaskRecord:
    """Shallow-merge `changes` over `task`, re-running validation."""
    if not changes:
        return task
    merged = {**task.model_dump(), **changes, "id": task.id}
    return TaskRecord.model_validate(merged)


def describe_changes(before: TaskRecord, after: TaskRecord) -> list[str]:
    """Human-readable status/progress transitions for the activity feed."""
    changes: list[str] = []
    if before.status != after.status:
        changes.append(f"status: {after.status}")
    if before.progress != after.progress:
        changes.append(f"progress: {after.progress}%")
    return changes


def remove_with_cascade(tasks: Sequence[TaskRecord], task_id: str) -> list[TaskRecord]:
    """Drop `task_id` and its children and prune it from every dependency list."""
    remaining: list[TaskRecord] = []
    for task in tasks:
        if task.id == task_id or task.parent_id == task_id:
            continue
        if task_id in task.dependencies:
            task = task.model_copy(
                update={"dependencies": [dep for dep in task.dependencies if dep != task_id]},
            )
        remaining.append(task)
    return remaining


class TaskService:
    """Task collection operations over a store with history and activity."""

    def __init__(
        self,
        store: TaskflowStore,
        *,
        history: HistoryLog,
        activity: ActivityLog,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._store = store
        self.history = history
        self.activity = activity
        self._today = today

    async def list_tasks(self) -> list[TaskRecord]:
        return await self._store.list_tasks()

    async def get_task(self, task_id: str) -> TaskRecord:
        for task in await self._store.list_tasks():
            if task.id == task_id:
                return task
        raise NotFoundError(TASK_NOT_FOUND)

    async def _commit(
        self,
        action: str,
        before: Sequence[TaskRecord],
        after: Sequence[TaskRecord],
    ) -> None:
        await self._store.replace_tasks(after)
        await self.history.record(action, before)

    async def _classified_defaults(self, payload: TaskCreate) -> dict[str, Any]:
        workspace = await self._store.get_settings()
        if not workspace.classifier_enabled:
            return {}
        inferred = classifier.classify(payload.name, payload.description)
        defaults: dict[str, Any] = {}
        if not payload.category:
            defaults["category"] = inferred.category
        if payload.priority is None:
            defaults["priority"] = inferred.priority
        if not payload.tags:
            defaults["tags"] = inferred.tags
        if not payload.estimated_hours:
            defaults["estimated_hours"] = inferred.estimated_hours
        return defaults

    async def create_task(self, payload: TaskCreate) -> TaskRecord:
        """Create a task, filling omitted fields with defaults or classifier output."""
        today = self._today()
        fields: dict[str, Any] = {"start": today, "end": today + DEFAULT_TASK_SPAN}
        fields.update(payload.changes())
        fields.update(await self._classified_defaults(payload))
        if not fields.get("category"):
            fields.pop("category", None)
        task = TaskRecord.model_validate(fields)

        before = await self._store.list_tasks()
        await self._commit("create", before, [*before, task])
        await self.activity.append("created", task.id, task.name)
        logger.info("tasks.created", extra={"task_id": task.id, "category": task.category})
        return task

    async def update_task(self, task_id: str, payload: TaskFields) -> TaskRecord:
        """Shallow-merge supplied fields over one task."""
        before = await self._store.list_tasks()
        index = next((i for i, task in enumerate(before) if task.id == task_id), None)
        if index is None:
            raise NotFoundError(TASK_NOT_FOUND)

        changes = payload.changes()
        old = before[index]
        updated = merge_task(old, changes)
        after = [*before[:index], updated, *before[index + 1 :]]
        await self._commit("update", before, after)
        await self._log_update(old, updated, fields=sorted(changes))
        return updated

    async def _log_update(self, old: TaskRecord, new: TaskRecord, *, fields: list[str]) -> None:
        await self.activity.append(
            "updated",
            new.id,
            new.name,
            {"changes": describe_changes(old, new), "fields": fields},
        )

    async def _apply_updates(
        self,
        action: str,
        updates: Iterable[tuple[str, dict[str, Any]]],
    ) -> list[TaskRecord]:
        before = await self._store.list_tasks()
        positions = {task.id: i for i, task in enumerate(before)}
        after = list(before)
        touched: list[tuple[TaskRecord, TaskRecord, list[str]]] = []
        for task_id, changes in updates:
            index = positions.get(task_id)
            if index is None:
                logger.debug("tasks.batch.skipped", extra={"task_id": task_id})
                continue
            old = after[index]
            after[index] = merge_task(old, changes)
            touched.append((old, after[index], sorted(changes)))

        await self._commit(action, before, after)
        for old, new, fields in touched:
            if describe_changes(old, new):
                await self._log_update(old, new, fields=fields)
        return after

    async def batch_update(self, task_ids: Sequence[str], payload: TaskFields) -> list[TaskRecord]:
        """Apply one partial update to every listed id; unknown ids are skipped."""
        changes = payload.changes()
        return await self._apply_updates(
            "batch_update",
            ((task_id, changes) for task_id in dict.fromkeys(task_ids)),
        )

    async def bulk_update(self, items: Sequence[TaskBulkUpdateItem]) -> list[TaskRecord]:
        """Apply per-task partial updates addressed by id; unknown ids are skipped."""
        return await self._apply_updates(
            "batch_update",
            ((item.id, item.changes()) for item in items),
        )

    async def delete_task(self, task_id: str) -> None:
        """Delete a task, its direct children, and references from dependency lists."""
        before = await self._store.list_tasks()
        task = next((task for task in before if task.id == task_id), None)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        after = remove_with_cascade(before, task_id)
        await self._commit("delete", before, after)
        await self.activity.append("deleted", task_id, task.name)
        logger.info(
            "tasks.deleted",
            extra={"task_id": task_id, "removed": len(before) - len(after)},
        )

    async def log_time(self, task_id: str, hours: float) -> TaskRecord:
        """Add worked hours to a task's actual hours."""
        before = await self._store.list_tasks()
        index = next((i for i, task in enumerate(before) if task.id == task_id), None)
        if index is None:
            raise NotFoundError(TASK_NOT_FOUND)
        old = before[index]
        updated = old.model_copy(update={"actual_hours": old.actual_hours + hours})
        after = [*before[:index], updated, *before[index + 1 :]]
        await self._commit("log_time", before, after)
        await self.activity.append("logged_time", task_id, updated.name, {"hours": hours})
        return updated

    async def auto_move(self) -> AutoMoveResult:
        """Schedule due work into today or staging; see `plan_auto_move`."""
        before = await self._store.list_tasks()
        after, moved = plan_auto_move(before, self._today())
        if moved:
            await self._commit("auto_move", before, after)
        logger.info("tasks.auto_move", extra={"moved": moved})
        return AutoMoveResult(moved=moved, tasks=after)

    async def replace_all(self, action: str, tasks: Sequence[TaskRecord]) -> list[TaskRecord]:
        """Swap in a whole new collection, recording the old one in history."""
        before = await self._store.list_tasks()
        after = list(tasks)
        await self._commit(action, before, after)
        return after

    async def undo(self) -> UndoRedoRead:
        current = await self._store.list_tasks()
        restore = await self.history.undo(current)
        return await self._restore(
            restore.state,
            can_undo=restore.can_undo,
            can_redo=restore.can_redo,
        )

    async def redo(self) -> UndoRedoRead:
        current = await self._store.list_tasks()
        restore = await self.history.redo(current)
        return await self._restore(
            restore.state,
            can_undo=restore.can_undo,
            can_redo=restore.can_redo,
        )

    async def _restore(
        self,
        state: list[dict[str, Any]],
        *,
        can_undo: bool,
        can_redo: bool,
    ) -> UndoRedoRead:
        tasks = [TaskRecord.model_validate(raw) for raw in state]
        await self._store.replace_tasks(tasks)
        return UndoRedoRead(tasks=tasks, can_undo=can_undo, can_redo=can_redo)

    async def history_status(self) -> HistoryStatusRead:
        return await self.history.status()
