# ruff: noqa: INP001
"""Export and import of the workspace."""

from __future__ import annotations

from datetime import date

import pytest

from conftest import TODAY, fixed_today
from taskflow.db.json_store import JsonFileStore
from taskflow.schemas.catalog import ProjectRead
from taskflow.schemas.tasks import TaskRecord
from taskflow.schemas.transfer import ImportPayload
from taskflow.services.exceptions import InvalidPayloadError
from taskflow.services.tasks import TaskService
from taskflow.services.transfer import CSV_COLUMNS, TransferService, render_csv


@pytest.fixture
def transfer(file_store: JsonFileStore, task_service: TaskService) -> TransferService:
    return TransferService(file_store, tasks=task_service, today=fixed_today)


def test_csv_quotes_every_value_and_doubles_quotes() -> None:
    task = TaskRecord(
        id="t-1",
        name='Say "hi", then leave',
        start=date(2026, 3, 1),
        end=date(2026, 3, 2),
        estimated_hours=2.5,
    )

    header, row = render_csv([task]).split("\n")

    assert header == ",".join(CSV_COLUMNS)
    assert row.startswith('"t-1","Say ""hi"", then leave","2026-03-01","2026-03-02","0",')
    assert row.endswith('"default","2.5","0"')


def test_csv_of_empty_collection_is_header_only() -> None:
    assert render_csv([]) == ",".join(CSV_COLUMNS)


@pytest.mark.asyncio
async def test_export_then_import_round_trip(
    file_store: JsonFileStore,
    transfer: TransferService,
) -> None:
    tasks = [
        TaskRecord(id="a", name="A", start=date(2026, 3, 1), end=date(2026, 3, 4), tags=["x"]),
        TaskRecord(id="b", name="B", start=date(2026, 3, 2), end=date(2026, 3, 9), parent_id="a"),
    ]
    await file_store.replace_tasks(tasks)
    exported = (await transfer.export_document()).model_dump(mode="json", by_alias=True)

    await file_store.replace_tasks([])
    result = await transfer.import_document(ImportPayload.model_validate(exported))

    assert result.task_count == 2
    assert await file_store.list_tasks() == tasks
    assert "exportedAt" in exported


@pytest.mark.asyncio
async def test_import_document_defaults_and_keeps_default_project(
    file_store: JsonFileStore,
    transfer: TransferService,
) -> None:
    payload = ImportPayload(
        tasks=[{"name": "Bare"}],
        projects=[ProjectRead(id="p-9", name="Imported")],
    )

    await transfer.import_document(payload)

    [task] = await file_store.list_tasks()
    assert task.id
    assert task.start == TODAY
    assert [project.id for project in await file_store.list_projects()] == ["default", "p-9"]


@pytest.mark.asyncio
async def test_import_tasks_merges_by_id(
    file_store: JsonFileStore,
    transfer: TransferService,
    task_service: TaskService,
) -> None:
    await file_store.replace_tasks(
        [TaskRecord(id="a", name="A", start=date(2026, 3, 1), end=date(2026, 3, 4))],
    )

    result = await transfer.import_tasks(
        [{"id": "a", "progress": 60}, {"id": "new", "name": "Fresh"}],
    )

    stored = await file_store.list_tasks()
    assert result.task_count == 2
    assert [(task.id, task.progress) for task in stored] == [("a", 60), ("new", 0)]
    assert stored[0].name == "A"

    await task_service.undo()
    assert [task.id for task in await file_store.list_tasks()] == ["a"]


@pytest.mark.asyncio
async def test_import_rejects_invalid_task(transfer: TransferService) -> None:
    with pytest.raises(InvalidPayloadError):
        await transfer.import_tasks([{"name": "Bad", "progress": 400}])
