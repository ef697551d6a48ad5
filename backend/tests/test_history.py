# ruff: noqa: INP001
"""Undo/redo stack bounds and swap semantics."""

from __future__ import annotations

from datetime import date

import pytest

from taskflow.db.json_store import JsonFileStore
from taskflow.schemas.tasks import TaskRecord
from taskflow.services.exceptions import EmptyStackError
from taskflow.services.history import HistoryLog


def _task(task_id: str) -> TaskRecord:
    return TaskRecord(id=task_id, name=task_id, start=date(2026, 1, 1), end=date(2026, 1, 2))


@pytest.mark.asyncio
async def test_record_clears_redo_and_caps_capacity(file_store: JsonFileStore) -> None:
    history = HistoryLog(file_store, capacity=50)

    for i in range(51):
        await history.record(f"action-{i}", [_task(f"t-{i}")])

    state = await file_store.load_history()
    assert len(state.undo_stack) == 50
    # The oldest entry was evicted.
    assert state.undo_stack[0].action == "action-1"
    assert state.undo_stack[-1].action == "action-50"


@pytest.mark.asyncio
async def test_undo_pushes_current_state_onto_redo(file_store: JsonFileStore) -> None:
    history = HistoryLog(file_store)
    await history.record("create", [])

    restore = await history.undo([_task("a")])

    assert restore.action == "create"
    assert restore.state == []
    assert restore.can_undo is False
    assert restore.can_redo is True
    state = await file_store.load_history()
    assert state.redo_stack[-1].action == "create"
    assert state.redo_stack[-1].state[0]["id"] == "a"


@pytest.mark.asyncio
async def test_new_record_clears_redo_stack(file_store: JsonFileStore) -> None:
    history = HistoryLog(file_store)
    await history.record("create", [])
    await history.undo([_task("a")])
    assert (await history.status()).can_redo is True

    await history.record("update", [])

    status = await history.status()
    assert status.can_redo is False
    assert status.can_undo is True


@pytest.mark.asyncio
async def test_empty_stacks_raise(file_store: JsonFileStore) -> None:
    history = HistoryLog(file_store)

    with pytest.raises(EmptyStackError, match="Nothing to undo"):
        await history.undo([])
    with pytest.raises(EmptyStackError, match="Nothing to redo"):
        await history.redo([])


@pytest.mark.asyncio
async def test_status_reports_flags_only(file_store: JsonFileStore) -> None:
    history = HistoryLog(file_store)

    status = await history.status()

    assert status.model_dump(by_alias=True) == {"canUndo": False, "canRedo": False}
