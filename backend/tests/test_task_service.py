# ruff: noqa: INP001
"""Task repository behavior against the JSON-file store."""

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest

from conftest import TODAY
from taskflow.db.json_store import JsonFileStore
from taskflow.schemas.tasks import TaskBulkUpdateItem, TaskCreate, TaskRecord, TaskUpdate
from taskflow.services.exceptions import EmptyStackError, NotFoundError, StoreUnavailableError
from taskflow.services.tasks import TaskService


async def _seed(store: JsonFileStore, *tasks: TaskRecord) -> None:
    await store.replace_tasks(list(tasks))


def _task(task_id: str, **fields: object) -> TaskRecord:
    fields.setdefault("start", date(2026, 3, 1))
    fields.setdefault("end", date(2026, 3, 20))
    fields.setdefault("name", f"Task {task_id}")
    return TaskRecord(id=task_id, **fields)


@pytest.mark.asyncio
async def test_create_fills_dates_and_classifier_defaults(task_service: TaskService) -> None:
    created = await task_service.create_task(TaskCreate(name="Urgent bug fix in login API"))

    assert created.start == TODAY
    assert created.end == TODAY + timedelta(days=7)
    assert created.category == "development"
    assert created.priority == "critical"
    assert "bug" in created.tags
    assert created.progress == 0
    assert created.status == "not_started"
    assert created.project_id == "default"
    assert [task.id for task in await task_service.list_tasks()] == [created.id]


@pytest.mark.asyncio
async def test_create_keeps_explicit_fields(task_service: TaskService) -> None:
    created = await task_service.create_task(
        TaskCreate(
            name="Urgent bug fix",
            category="research",
            priority="low",
            tags=["mine"],
            estimatedHours=3,
        ),
    )

    assert created.category == "research"
    assert created.priority == "low"
    assert created.tags == ["mine"]
    assert created.estimated_hours == 3


@pytest.mark.asyncio
async def test_create_skips_classifier_when_disabled(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    workspace = await file_store.get_settings()
    disabled = workspace.model_copy(update={"enable_ai": False})
    await file_store.save_settings(disabled)

    created = await task_service.create_task(TaskCreate(name="Urgent bug fix"))

    assert created.category == "general"
    assert created.priority == "medium"
    assert created.tags == []


@pytest.mark.asyncio
async def test_create_milestone_collapses_end(task_service: TaskService) -> None:
    created = await task_service.create_task(
        TaskCreate(name="Launch", type="milestone", start=date(2026, 4, 1), end=date(2026, 4, 9)),
    )

    assert created.end == date(2026, 4, 1)


@pytest.mark.asyncio
async def test_update_merges_and_logs_transition(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("a"))

    updated = await task_service.update_task("a", TaskUpdate(status="completed", progress=100))

    assert updated.status == "completed"
    assert updated.progress == 100
    assert updated.name == "Task a"
    activity = await task_service.activity.recent(1)
    assert activity[0].action == "updated"
    assert activity[0].details["changes"] == ["status: completed", "progress: 100%"]


@pytest.mark.asyncio
async def test_update_unknown_task_raises(task_service: TaskService) -> None:
    with pytest.raises(NotFoundError):
        await task_service.update_task("missing", TaskUpdate(name="x"))


@pytest.mark.asyncio
async def test_update_can_clear_nullable_fields(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("a", scheduled_date="soon", parent_id="p"))

    updated = await task_service.update_task(
        "a",
        TaskUpdate.model_validate({"scheduledDate": None, "parentId": None, "name": None}),
    )

    assert updated.scheduled_date is None
    assert updated.parent_id is None
    assert updated.name == "Task a"


@pytest.mark.asyncio
async def test_delete_cascades_children_and_dependencies(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(
        file_store,
        _task("p"),
        _task("child", parent_id="p"),
        _task("dependent", dependencies=["p", "other"]),
        _task("other"),
    )

    await task_service.delete_task("p")

    remaining = await task_service.list_tasks()
    assert [task.id for task in remaining] == ["dependent", "other"]
    assert remaining[0].dependencies == ["other"]


@pytest.mark.asyncio
async def test_delete_unknown_task_raises(task_service: TaskService) -> None:
    with pytest.raises(NotFoundError):
        await task_service.delete_task("nope")


@pytest.mark.asyncio
async def test_batch_update_skips_unknown_ids(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("a"), _task("b"), _task("c"))

    result = await task_service.batch_update(["a", "ghost", "c"], TaskUpdate(priority="high"))

    assert [task.priority for task in result] == ["high", "medium", "high"]
    status = await task_service.history_status()
    assert status.can_undo is True


@pytest.mark.asyncio
async def test_bulk_update_applies_per_task_changes(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("a"), _task("b"))

    result = await task_service.bulk_update(
        [
            TaskBulkUpdateItem(id="a", progress=40),
            TaskBulkUpdateItem(id="b", assignee="sam"),
            TaskBulkUpdateItem(id="zzz", progress=90),
        ],
    )

    assert result[0].progress == 40
    assert result[1].assignee == "sam"
    assert len(result) == 2


@pytest.mark.asyncio
async def test_log_time_accumulates_actual_hours(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("a", actual_hours=1.5))

    updated = await task_service.log_time("a", 2)

    assert updated.actual_hours == 3.5
    activity = await task_service.activity.recent(1)
    assert activity[0].details == {"hours": 2}


@pytest.mark.asyncio
async def test_undo_then_redo_restores_exact_collections(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    original = _task("a", tags=["x"], recurring={"every": "week"}, scheduled_date="soon")
    await _seed(file_store, original)

    await task_service.update_task("a", TaskUpdate(name="Renamed", progress=55))
    edited = await task_service.list_tasks()

    undone = await task_service.undo()
    assert undone.tasks == [original]
    assert undone.can_undo is False
    assert undone.can_redo is True
    assert await task_service.list_tasks() == [original]

    redone = await task_service.redo()
    assert redone.tasks == edited
    assert redone.can_undo is True
    assert redone.can_redo is False


@pytest.mark.asyncio
async def test_undo_restores_deleted_task(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("p"), _task("child", parent_id="p"))

    await task_service.delete_task("p")
    await task_service.undo()

    assert [task.id for task in await task_service.list_tasks()] == ["p", "child"]


@pytest.mark.asyncio
async def test_undo_with_empty_history_raises(task_service: TaskService) -> None:
    with pytest.raises(EmptyStackError):
        await task_service.undo()


@pytest.mark.asyncio
async def test_history_capacity_is_enforced(file_store: JsonFileStore, make_service) -> None:
    service = make_service(file_store, capacity=2)

    for name in ("one", "two", "three"):
        await service.create_task(TaskCreate(name=name))

    await service.undo()
    await service.undo()
    with pytest.raises(EmptyStackError):
        await service.undo()
    assert [task.name for task in await service.list_tasks()] == ["one"]


@pytest.mark.asyncio
async def test_auto_move_without_changes_records_no_history(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("done", status="completed", end=date(2026, 3, 1)))

    result = await task_service.auto_move()

    assert result.moved == 0
    assert (await task_service.history_status()).can_undo is False


@pytest.mark.asyncio
async def test_corrupt_activity_file_does_not_fail_mutation(
    file_store: JsonFileStore,
    task_service: TaskService,
) -> None:
    await _seed(file_store, _task("a"))
    file_store.activity_path.parent.mkdir(parents=True, exist_ok=True)
    file_store.activity_path.write_text(json.dumps({"activities": 5}), encoding="utf-8")

    updated = await task_service.update_task("a", TaskUpdate(status="completed"))

    assert updated.status == "completed"
    assert (await task_service.get_task("a")).status == "completed"
    with pytest.raises(StoreUnavailableError):
        await file_store.list_activity()
