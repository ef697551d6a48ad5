# ruff: noqa: INP001
"""Relational store round trips against in-memory SQLite."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from taskflow.db.session import create_schema
from taskflow.db.sql_store import SqlStore
from taskflow.schemas.catalog import LabelRead, ProjectRead
from taskflow.models.tasks import Task
from taskflow.schemas.tasks import TaskCreate, TaskRecord, TaskUpdate
from taskflow.services.tasks import TaskService


@pytest_asyncio.fixture
async def sql_store() -> AsyncIterator[SqlStore]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_schema(engine)
    async with AsyncSession(engine, expire_on_commit=False) as session:
        store = SqlStore(session)
        await store.ensure_seeded()
        yield store
    await engine.dispose()


def _task(task_id: str, **fields: object) -> TaskRecord:
    fields.setdefault("start", date(2026, 3, 1))
    fields.setdefault("end", date(2026, 3, 20))
    fields.setdefault("name", f"Task {task_id}")
    return TaskRecord(id=task_id, **fields)


@pytest.mark.asyncio
async def test_seeding_creates_defaults_once(sql_store: SqlStore) -> None:
    await sql_store.ensure_seeded()

    projects = await sql_store.list_projects()
    labels = await sql_store.list_labels()
    assert [project.id for project in projects] == ["default"]
    assert len(labels) == len({label.id for label in labels}) > 0
    assert (await sql_store.get_settings()).enable_ai is True


@pytest.mark.asyncio
async def test_replace_tasks_preserves_order_and_fields(sql_store: SqlStore) -> None:
    tasks = [
        _task("b", tags=["x", "y"], dependencies=["a"], recurring={"every": "day"}),
        _task("a", scheduled_date="soon", parent_id="b", actual_hours=2.5),
        _task("c", project_id="default", type="milestone"),
    ]

    await sql_store.replace_tasks(tasks)

    assert await sql_store.list_tasks() == tasks


@pytest.mark.asyncio
async def test_replace_tasks_deletes_missing_rows(sql_store: SqlStore) -> None:
    await sql_store.replace_tasks([_task("a"), _task("b")])

    await sql_store.replace_tasks([_task("b", name="kept")])

    stored = await sql_store.list_tasks()
    assert [(task.id, task.name) for task in stored] == [("b", "kept")]


@pytest.mark.asyncio
async def test_projects_and_labels_replace(sql_store: SqlStore) -> None:
    projects = [*await sql_store.list_projects(), ProjectRead(id="p-2", name="Side")]
    await sql_store.replace_projects(projects)
    await sql_store.replace_labels([LabelRead(id="l-1", name="Only", color="#000000")])

    assert [project.id for project in await sql_store.list_projects()] == ["default", "p-2"]
    assert [label.id for label in await sql_store.list_labels()] == ["l-1"]


@pytest.mark.asyncio
async def test_undo_restores_exact_snapshot(sql_store: SqlStore, make_service) -> None:
    service: TaskService = make_service(sql_store)
    original = _task("a", tags=["keep"], scheduled_date="2026-03-12", reminder_time="09:00")
    await sql_store.replace_tasks([original, _task("b")])

    await service.update_task("a", TaskUpdate(name="Changed", tags=[]))
    await service.delete_task("b")
    await service.undo()
    undone = await service.undo()

    assert undone.tasks == [original, _task("b")]
    assert await sql_store.list_tasks() == [original, _task("b")]
    assert (await service.history_status()).can_redo is True


@pytest.mark.asyncio
async def test_activity_is_trimmed(sql_store: SqlStore, make_service) -> None:
    service: TaskService = make_service(sql_store, max_entries=2)

    for name in ("one", "two", "three"):
        await service.activity.append("created", name, name)

    assert len(await sql_store.list_activity()) == 2


@pytest.mark.asyncio
async def test_ping(sql_store: SqlStore) -> None:
    await sql_store.ping()


@pytest.mark.asyncio
async def test_service_writes_naive_utc_timestamps(sql_store: SqlStore, make_service) -> None:
    service: TaskService = make_service(sql_store)

    created = await service.create_task(TaskCreate(name="Write release notes"))

    row = await sql_store.session.get(Task, created.id)
    assert row is not None
    assert row.created_at.tzinfo is None
    assert row.updated_at.tzinfo is None
    [entry] = await sql_store.list_activity()
    assert entry.action == "created"
    assert entry.timestamp.tzinfo is None
    history = await sql_store.load_history()
    assert [item.action for item in history.undo_stack] == ["create"]
