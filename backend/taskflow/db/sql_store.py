"""Relational store over the SQLModel table set."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from taskflow.core.logging import get_logger
from taskflow.core.time import utcnow
from taskflow.db.field_mapping import (
    from_storage_project_id,
    task_from_row,
    task_to_columns,
    to_storage_project_id,
)
from taskflow.db.store import TaskflowStore
from taskflow.models.activity_log import ActivityLogEntry
from taskflow.models.history_entries import REDO_STACK, UNDO_STACK, HistoryRow
from taskflow.models.labels import Label
from taskflow.models.projects import Project
from taskflow.models.tasks import Task
from taskflow.models.workspace_settings import WORKSPACE_SETTINGS_ROW_ID, WorkspaceSettings
from taskflow.schemas.activity import ActivityEntryRead
from taskflow.schemas.catalog import (
    DEFAULT_LABELS,
    DEFAULT_PROJECT,
    LabelRead,
    ProjectRead,
    WorkspaceSettingsRead,
)
from taskflow.schemas.history import HistoryEntry, HistoryState
from taskflow.services.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskflow.schemas.tasks import TaskRecord

logger = get_logger(__name__)

_SETTINGS_COLUMNS = (
    "theme",
    "default_view",
    "show_weekends",
    "work_hours_start",
    "work_hours_end",
    "enable_ai",
    "auto_classify",
)


def _unique_by_id(items: Sequence[Any]) -> list[Any]:
    """Keep the first position of each id with its last value."""
    by_id: dict[str, Any] = {}
    for item in items:
        by_id[item.id] = item
    return list(by_id.values())


class SqlStore(TaskflowStore):
    """Store backed by a request-scoped `AsyncSession`; every write commits."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _commit(self, operation: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("store.sql.commit_failed", extra={"operation": operation})
            raise StoreUnavailableError(f"Failed to {operation}") from exc

    async def ensure_seeded(self) -> None:
        """Insert the default project, labels, and settings row when missing."""
        try:
            default_project = await self.session.get(
                Project, to_storage_project_id(DEFAULT_PROJECT.id)
            )
            if default_project is None:
                self.session.add(
                    Project(
                        id=to_storage_project_id(DEFAULT_PROJECT.id),
                        name=DEFAULT_PROJECT.name,
                        description=DEFAULT_PROJECT.description,
                        color=DEFAULT_PROJECT.color,
                    ),
                )
            existing_label = (await self.session.exec(select(Label).limit(1))).first()
            if existing_label is None:
                for position, label in enumerate(DEFAULT_LABELS):
                    self.session.add(
                        Label(id=label.id, position=position, name=label.name, color=label.color),
                    )
            if await self.session.get(WorkspaceSettings, WORKSPACE_SETTINGS_ROW_ID) is None:
                self.session.add(WorkspaceSettings())
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to seed database") from exc
        await self._commit("seed database")

    async def list_tasks(self) -> list[TaskRecord]:
        try:
            rows = list(
                await self.session.exec(
                    select(Task).order_by(col(Task.position).asc(), col(Task.created_at).asc()),
                ),
            )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to fetch tasks") from exc
        return [task_from_row(row) for row in rows]

    async def replace_tasks(self, tasks: Sequence[TaskRecord]) -> None:
        try:
            existing = {row.id: row for row in await self.session.exec(select(Task))}
            kept: set[str] = set()
            now = utcnow()
            for position, task in enumerate(_unique_by_id(tasks)):
                columns = task_to_columns(task)
                row = existing.get(task.id)
                if row is None:
                    self.session.add(
                        Task(position=position, created_at=now, updated_at=now, **columns),
                    )
                    continue
                kept.add(task.id)
                row.position = position
                for column, value in columns.items():
                    setattr(row, column, value)
                row.updated_at = now
                self.session.add(row)
            for task_id, row in existing.items():
                if task_id not in kept:
                    await self.session.delete(row)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to save tasks") from exc
        await self._commit("save tasks")

    async def list_projects(self) -> list[ProjectRead]:
        try:
            rows = list(
                await self.session.exec(
                    select(Project).order_by(
                        col(Project.position).asc(),
                        col(Project.created_at).asc(),
                    ),
                ),
            )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to fetch projects") from exc
        return [
            ProjectRead(
                id=from_storage_project_id(row.id),
                name=row.name,
                description=row.description,
                color=row.color,
            )
            for row in rows
        ]

    async def replace_projects(self, projects: Sequence[ProjectRead]) -> None:
        try:
            existing = {row.id: row for row in await self.session.exec(select(Project))}
            kept: set[str] = set()
            for position, project in enumerate(_unique_by_id(projects)):
                storage_id = to_storage_project_id(project.id)
                row = existing.get(storage_id)
                if row is None:
                    row = Project(id=storage_id, name=project.name)
                else:
                    kept.add(storage_id)
                row.position = position
                row.name = project.name
                row.description = project.description
                row.color = project.color
                self.session.add(row)
            for storage_id, row in existing.items():
                if storage_id not in kept:
                    await self.session.delete(row)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to save projects") from exc
        await self._commit("save projects")

    async def list_labels(self) -> list[LabelRead]:
        try:
            rows = list(await self.session.exec(select(Label).order_by(col(Label.position).asc())))
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to fetch labels") from exc
        return [LabelRead(id=row.id, name=row.name, color=row.color) for row in rows]

    async def replace_labels(self, labels: Sequence[LabelRead]) -> None:
        try:
            existing = {row.id: row for row in await self.session.exec(select(Label))}
            kept: set[str] = set()
            for position, label in enumerate(_unique_by_id(labels)):
                row = existing.get(label.id)
                if row is None:
                    row = Label(id=label.id)
                else:
                    kept.add(label.id)
                row.position = position
                row.name = label.name
                row.color = label.color
                self.session.add(row)
            for label_id, row in existing.items():
                if label_id not in kept:
                    await self.session.delete(row)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to save labels") from exc
        await self._commit("save labels")

    async def get_settings(self) -> WorkspaceSettingsRead:
        try:
            row = await self.session.get(WorkspaceSettings, WORKSPACE_SETTINGS_ROW_ID)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to fetch settings") from exc
        if row is None:
            return WorkspaceSettingsRead()
        return WorkspaceSettingsRead.model_validate(
            {column: getattr(row, column) for column in _SETTINGS_COLUMNS},
        )

    async def save_settings(self, workspace_settings: WorkspaceSettingsRead) -> None:
        try:
            row = await self.session.get(WorkspaceSettings, WORKSPACE_SETTINGS_ROW_ID)
            if row is None:
                row = WorkspaceSettings()
            for column in _SETTINGS_COLUMNS:
                setattr(row, column, getattr(workspace_settings, column))
            self.session.add(row)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to save settings") from exc
        await self._commit("save settings")

    async def load_history(self) -> HistoryState:
        try:
            rows = list(
                await self.session.exec(
                    select(HistoryRow).order_by(col(HistoryRow.position).asc()),
                ),
            )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to fetch history") from exc
        state = HistoryState()
        for row in rows:
            entry = HistoryEntry(
                action=row.action,
                state=list(row.state or []),
                timestamp=row.created_at,
            )
            if row.stack == UNDO_STACK:
                state.undo_stack.append(entry)
            elif row.stack == REDO_STACK:
                state.redo_stack.append(entry)
        return state

    async def save_history(self, state: HistoryState) -> None:
        try:
            await self.session.exec(delete(HistoryRow))
            for stack, entries in ((UNDO_STACK, state.undo_stack), (REDO_STACK, state.redo_stack)):
                for position, entry in enumerate(entries):
                    self.session.add(
                        HistoryRow(
                            stack=stack,
                            position=position,
                            action=entry.action,
                            state=entry.state,
                            created_at=entry.timestamp,
                        ),
                    )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to save history") from exc
        await self._commit("save history")

    async def list_activity(self, limit: int | None = None) -> list[ActivityEntryRead]:
        statement = select(ActivityLogEntry).order_by(col(ActivityLogEntry.created_at).desc())
        if limit is not None:
            statement = statement.limit(limit)
        try:
            rows = list(await self.session.exec(statement))
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to fetch activity") from exc
        return [
            ActivityEntryRead(
                id=row.id,
                action=row.action,
                task_id=row.task_id,
                task_name=row.task_name,
                details=dict(row.details or {}),
                timestamp=row.created_at,
            )
            for row in rows
        ]

    async def append_activity(
        self,
        entry: ActivityEntryRead,
        *,
        max_entries: int | None,
    ) -> None:
        try:
            self.session.add(
                ActivityLogEntry(
                    id=entry.id,
                    action=entry.action,
                    task_id=entry.task_id,
                    task_name=entry.task_name,
                    details=entry.details,
                    created_at=entry.timestamp,
                ),
            )
            if max_entries is not None:
                await self.session.flush()
                stale_ids = list(
                    await self.session.exec(
                        select(col(ActivityLogEntry.id))
                        .order_by(col(ActivityLogEntry.created_at).desc())
                        .offset(max_entries),
                    ),
                )
                if stale_ids:
                    await self.session.exec(
                        delete(ActivityLogEntry).where(col(ActivityLogEntry.id).in_(stale_ids)),
                    )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to append activity") from exc
        await self._commit("append activity")

    async def ping(self) -> None:
        try:
            await self.session.exec(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Database unreachable") from exc
