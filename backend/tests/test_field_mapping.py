# ruff: noqa: INP001
"""Wire/storage field translation for the relational backend."""

from __future__ import annotations

from datetime import date

from taskflow.db.field_mapping import (
    COLUMN_TO_WIRE,
    DEFAULT_PROJECT_STORAGE_ID,
    TASK_FIELD_MAP,
    from_storage_project_id,
    task_from_row,
    task_to_columns,
    to_storage_project_id,
)
from taskflow.models.tasks import Task
from taskflow.schemas.tasks import TaskRecord


def test_every_task_field_has_exactly_one_column() -> None:
    wire_keys = {field.alias or name for name, field in TaskRecord.model_fields.items()}

    assert {mapping.wire for mapping in TASK_FIELD_MAP} == wire_keys
    assert len(COLUMN_TO_WIRE) == len(TASK_FIELD_MAP)


def test_every_mapped_column_exists_on_the_table() -> None:
    columns = set(Task.__table__.columns.keys())

    assert {mapping.column for mapping in TASK_FIELD_MAP} <= columns


def test_default_project_sentinel_round_trips() -> None:
    assert to_storage_project_id("default") == DEFAULT_PROJECT_STORAGE_ID
    assert from_storage_project_id(DEFAULT_PROJECT_STORAGE_ID) == "default"
    assert to_storage_project_id("p-1") == "p-1"
    assert from_storage_project_id("p-1") == "p-1"
    assert from_storage_project_id(None) == "default"


def test_task_columns_use_storage_names() -> None:
    task = TaskRecord(
        id="t-1",
        name="Ship",
        start=date(2026, 3, 1),
        end=date(2026, 3, 4),
        project_id="default",
        estimated_hours=3,
        scheduled_date="soon",
    )

    columns = task_to_columns(task)

    assert columns["start_date"] == date(2026, 3, 1)
    assert columns["end_date"] == date(2026, 3, 4)
    assert columns["project_id"] == DEFAULT_PROJECT_STORAGE_ID
    assert columns["estimated_hours"] == 3
    assert columns["scheduled_date"] == "soon"
    assert "start" not in columns


def test_row_translates_back_to_wire_task() -> None:
    task = TaskRecord(
        id="t-2",
        name="Plan",
        start=date(2026, 3, 1),
        end=date(2026, 3, 2),
        tags=["review"],
        dependencies=["t-1"],
        recurring={"every": "week"},
    )
    row = Task(position=0, **task_to_columns(task))

    restored = task_from_row(row)

    assert restored == task
    assert restored.to_wire()["projectId"] == "default"
