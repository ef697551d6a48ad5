"""Bounded undo/redo stacks of whole task-collection snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from taskflow.core.logging import get_logger
from taskflow.schemas.history import HistoryEntry, HistoryStatusRead
from taskflow.services.exceptions import EmptyStackError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taskflow.db.store import TaskflowStore
    from taskflow.schemas.history import HistoryState
    from taskflow.schemas.tasks import TaskRecord

logger = get_logger(__name__)

DEFAULT_HISTORY_CAPACITY = 50


def snapshot(tasks: Sequence[TaskRecord]) -> list[dict]:
    """Return a detached wire-form copy of a task collection."""
    return [task.to_wire() for task in tasks]


@dataclass(frozen=True)
class Restore:
    """Result of an undo or redo: the snapshot to make live plus fresh flags."""

    action: str
    state: list[dict]
    can_undo: bool
    can_redo: bool


class HistoryLog:
    """Undo/redo stacks persisted through a store.

    `record` pushes the state *before* a mutation; `undo`/`redo` swap the
    live collection with the top of one stack and push it on the other.
    """

    def __init__(self, store: TaskflowStore, *, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        self._store = store
        self.capacity = capacity

    def _trim(self, entries: list[HistoryEntry]) -> list[HistoryEntry]:
        if len(entries) > self.capacity:
            return entries[-self.capacity :]
        return entries

    async def record(self, action: str, before: Sequence[TaskRecord]) -> None:
        """Push a snapshot taken before `action` and clear the redo stack."""
        state = await self._store.load_history()
        state.undo_stack.append(HistoryEntry(action=action, state=snapshot(before)))
        state.undo_stack = self._trim(state.undo_stack)
        state.redo_stack = []
        await self._store.save_history(state)

    async def _swap(
        self,
        current: Sequence[TaskRecord],
        *,
        undo: bool,
    ) -> Restore:
        state: HistoryState = await self._store.load_history()
        source, target = (
            (state.undo_stack, state.redo_stack) if undo else (state.redo_stack, state.undo_stack)
        )
        if not source:
            raise EmptyStackError("Nothing to undo" if undo else "Nothing to redo")
        entry = source.pop()
        target.append(HistoryEntry(action=entry.action, state=snapshot(current)))
        state.undo_stack = self._trim(state.undo_stack)
        state.redo_stack = self._trim(state.redo_stack)
        await self._store.save_history(state)
        logger.info(
            "history.undo" if undo else "history.redo",
            extra={"history_action": entry.action},
        )
        return Restore(
            action=entry.action,
            state=entry.state,
            can_undo=bool(state.undo_stack),
            can_redo=bool(state.redo_stack),
        )

    async def undo(self, current: Sequence[TaskRecord]) -> Restore:
        """Pop the newest undo snapshot, pushing `current` onto the redo stack."""
        return await self._swap(current, undo=True)

    async def redo(self, current: Sequence[TaskRecord]) -> Restore:
        """Pop the newest redo snapshot, pushing `current` onto the undo stack."""
        return await self._swap(current, undo=False)

    async def status(self) -> HistoryStatusRead:
        state = await self._store.load_history()
        return HistoryStatusRead(can_undo=bool(state.undo_stack), can_redo=bool(state.redo_stack))
