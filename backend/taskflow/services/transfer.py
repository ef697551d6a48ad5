"""Workspace export (JSON or CSV) and import (full replace or merge by id)."""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from taskflow.core.logging import get_logger
from taskflow.core.time import utc_today, utcnow
from taskflow.schemas.catalog import DEFAULT_PROJECT
from taskflow.schemas.tasks import DEFAULT_PROJECT_ID, TaskRecord, TaskUpdate
from taskflow.schemas.transfer import ExportDocument, ImportPayload, ImportResult
from taskflow.services.exceptions import InvalidPayloadError
from taskflow.services.suggestions import format_hours
from taskflow.services.tasks import DEFAULT_TASK_SPAN, merge_task

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import date

    from taskflow.db.store import TaskflowStore
    from taskflow.services.tasks import TaskService

logger = get_logger(__name__)

CSV_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "start",
    "end",
    "progress",
    "type",
    "status",
    "priority",
    "category",
    "color",
    "description",
    "assignee",
    "projectId",
    "estimatedHours",
    "actualHours",
)


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        return format_hours(value)
    return str(value)


def render_csv(tasks: Sequence[TaskRecord]) -> str:
    """Render tasks with a fixed header; every value quoted, quotes doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(CSV_COLUMNS) + "\n")
    for task in tasks:
        wire = task.to_wire()
        writer.writerow([_csv_value(wire.get(column)) for column in CSV_COLUMNS])
    return buffer.getvalue().removesuffix("\n")


def coerce_task(raw: dict[str, Any], today: date) -> TaskRecord:
    """Validate an imported task, defaulting a missing id and date range."""
    data = dict(raw)
    if not data.get("id"):
        data.pop("id", None)
    data.setdefault("start", today.isoformat())
    data.setdefault("end", (today + DEFAULT_TASK_SPAN).isoformat())
    try:
        return TaskRecord.model_validate(data)
    except ValidationError as exc:
        raise InvalidPayloadError(f"Invalid task in import: {exc.errors()[0]['msg']}") from exc


class TransferService:
    """Export the workspace and import task collections."""

    def __init__(
        self,
        store: TaskflowStore,
        *,
        tasks: TaskService,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._store = store
        self._tasks = tasks
        self._today = today

    async def export_document(self) -> ExportDocument:
        return ExportDocument(
            tasks=await self._store.list_tasks(),
            projects=await self._store.list_projects(),
            labels=await self._store.list_labels(),
            settings=await self._store.get_settings(),
            exported_at=utcnow(),
        )

    async def export_csv(self) -> str:
        return render_csv(await self._store.list_tasks())

    async def import_document(self, payload: ImportPayload) -> ImportResult:
        """Replace tasks, and projects/labels when present, with the payload."""
        today = self._today()
        tasks = [coerce_task(raw, today) for raw in payload.tasks]
        if payload.projects is not None:
            projects = list(payload.projects)
            if not any(project.id == DEFAULT_PROJECT_ID for project in projects):
                projects.insert(0, DEFAULT_PROJECT)
            await self._store.replace_projects(projects)
        if payload.labels is not None:
            await self._store.replace_labels(payload.labels)
        stored = await self._tasks.replace_all("import", tasks)
        logger.info("transfer.imported", extra={"mode": "replace", "task_count": len(stored)})
        return ImportResult(task_count=len(stored))

    async def import_tasks(self, raw_tasks: Sequence[dict[str, Any]]) -> ImportResult:
        """Merge tasks by id: known ids are shallow-merged, others appended."""
        today = self._today()
        merged = await self._store.list_tasks()
        positions = {task.id: i for i, task in enumerate(merged)}
        for raw in raw_tasks:
            index = positions.get(str(raw.get("id") or ""))
            if index is None:
                task = coerce_task(raw, today)
                positions[task.id] = len(merged)
                merged.append(task)
                continue
            try:
                changes = TaskUpdate.model_validate(raw).changes()
            except ValidationError as exc:
                raise InvalidPayloadError(
                    f"Invalid task in import: {exc.errors()[0]['msg']}",
                ) from exc
            merged[index] = merge_task(merged[index], changes)
        stored = await self._tasks.replace_all("import", merged)
        logger.info("transfer.imported", extra={"mode": "merge", "task_count": len(stored)})
        return ImportResult(task_count=len(stored))
