# ruff: noqa: INP001
"""JSON-document store seeding, validation, and thread offloading."""

from __future__ import annotations

import asyncio
import json
from datetime import date

import pytest

from taskflow.db import json_store
from taskflow.db.json_store import JsonFileStore
from taskflow.schemas.activity import ActivityEntryRead
from taskflow.schemas.tasks import TaskRecord
from taskflow.services.exceptions import StoreUnavailableError


@pytest.mark.asyncio
async def test_first_read_seeds_documents(file_store: JsonFileStore) -> None:
    assert await file_store.list_tasks() == []
    assert [project.id for project in await file_store.list_projects()] == ["default"]
    assert file_store.data_path.exists()
    assert (await file_store.load_history()).undo_stack == []


@pytest.mark.asyncio
async def test_file_access_runs_off_the_event_loop(
    file_store: JsonFileStore,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    offloaded: list[str] = []
    real_to_thread = asyncio.to_thread

    async def _recording_to_thread(func, /, *args, **kwargs):
        offloaded.append(func.__name__)
        return await real_to_thread(func, *args, **kwargs)

    monkeypatch.setattr(json_store.asyncio, "to_thread", _recording_to_thread)
    task = TaskRecord(id="a", name="A", start=date(2026, 3, 1), end=date(2026, 3, 2))

    await file_store.replace_tasks([task])
    await file_store.append_activity(
        ActivityEntryRead(action="created", task_id="a", task_name="A"),
        max_entries=10,
    )

    assert await file_store.list_tasks() == [task]
    assert offloaded == ["_update_data", "_prepend_activity", "_read_collection"]


@pytest.mark.asyncio
async def test_non_list_collections_are_rejected(file_store: JsonFileStore) -> None:
    file_store.data_path.parent.mkdir(parents=True, exist_ok=True)
    file_store.data_path.write_text(json.dumps({"tasks": {"a": 1}}), encoding="utf-8")
    file_store.activity_path.write_text(json.dumps({"activities": "x"}), encoding="utf-8")

    with pytest.raises(StoreUnavailableError, match="Malformed tasks"):
        await file_store.list_tasks()
    with pytest.raises(StoreUnavailableError, match="Malformed activities"):
        await file_store.append_activity(
            ActivityEntryRead(action="created"),
            max_entries=None,
        )


@pytest.mark.asyncio
async def test_invalid_json_is_a_store_error(file_store: JsonFileStore) -> None:
    file_store.data_path.parent.mkdir(parents=True, exist_ok=True)
    file_store.data_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreUnavailableError, match="Failed to read tasks.json"):
        await file_store.ping()
