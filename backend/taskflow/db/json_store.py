"""JSON-document store: one file each for workspace data, history, and activity."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from taskflow.core.logging import get_logger
from taskflow.db.store import TaskflowStore
from taskflow.schemas.activity import ActivityEntryRead
from taskflow.schemas.catalog import (
    DEFAULT_LABELS,
    DEFAULT_PROJECT,
    LabelRead,
    ProjectRead,
    WorkspaceSettingsRead,
)
from taskflow.schemas.history import HistoryState
from taskflow.schemas.tasks import TaskRecord
from taskflow.services.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

DATA_FILE_NAME = "tasks.json"
HISTORY_FILE_NAME = "history.json"
ACTIVITY_FILE_NAME = "activity.json"


def _initial_data() -> dict[str, Any]:
    return {
        "tasks": [],
        "projects": [DEFAULT_PROJECT.model_dump(mode="json")],
        "labels": [label.model_dump(mode="json") for label in DEFAULT_LABELS],
        "settings": WorkspaceSettingsRead().model_dump(mode="json", by_alias=True),
    }


def _initial_history() -> dict[str, Any]:
    return {"undoStack": [], "redoStack": []}


def _initial_activity() -> dict[str, Any]:
    return {"activities": []}


class JsonFileStore(TaskflowStore):
    """Store every collection as pretty-printed JSON under `data_dir`.

    Files are created with seed data on first access and rewritten
    wholesale on every change.
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self.data_path = self._data_dir / DATA_FILE_NAME
        self.history_path = self._data_dir / HISTORY_FILE_NAME
        self.activity_path = self._data_dir / ACTIVITY_FILE_NAME

    def _read(self, path: Path, initial: dict[str, Any]) -> dict[str, Any]:
        try:
            if not path.exists():
                self._write(path, initial)
                return initial
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("store.file.read_failed", extra={"path": str(path), "error": str(exc)})
            raise StoreUnavailableError(f"Failed to read {path.name}") from exc
        if not isinstance(document, dict):
            raise StoreUnavailableError(f"Malformed document in {path.name}")
        return document

    def _write(self, path: Path, document: dict[str, Any]) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            logger.error("store.file.write_failed", extra={"path": str(path), "error": str(exc)})
            raise StoreUnavailableError(f"Failed to write {path.name}") from exc

    def _collection(self, document: dict[str, Any], key: str, path: Path) -> list[Any]:
        values = document.get(key)
        if values is None:
            return []
        if not isinstance(values, list):
            logger.error("store.file.malformed", extra={"path": str(path), "key": key})
            raise StoreUnavailableError(f"Malformed {key} in {path.name}")
        return values

    def _read_data(self) -> dict[str, Any]:
        return self._read(self.data_path, _initial_data())

    def _read_collection(self, key: str) -> list[Any]:
        return self._collection(self._read_data(), key, self.data_path)

    def _update_data(self, key: str, value: Any) -> None:
        document = self._read_data()
        document[key] = value
        self._write(self.data_path, document)

    def _read_activities(self) -> list[Any]:
        document = self._read(self.activity_path, _initial_activity())
        return self._collection(document, "activities", self.activity_path)

    def _prepend_activity(self, raw_entry: dict[str, Any], max_entries: int | None) -> None:
        entries = [raw_entry, *self._read_activities()]
        if max_entries is not None:
            entries = entries[:max_entries]
        self._write(self.activity_path, {"activities": entries})

    # Blocking file access runs in worker threads.

    async def list_tasks(self) -> list[TaskRecord]:
        raw_tasks = await asyncio.to_thread(self._read_collection, "tasks")
        try:
            return [TaskRecord.model_validate(raw) for raw in raw_tasks]
        except ValidationError as exc:
            raise StoreUnavailableError(f"Malformed task in {DATA_FILE_NAME}") from exc

    async def replace_tasks(self, tasks: Sequence[TaskRecord]) -> None:
        await asyncio.to_thread(self._update_data, "tasks", [task.to_wire() for task in tasks])

    async def list_projects(self) -> list[ProjectRead]:
        raw_projects = await asyncio.to_thread(self._read_collection, "projects")
        return [ProjectRead.model_validate(raw) for raw in raw_projects]

    async def replace_projects(self, projects: Sequence[ProjectRead]) -> None:
        await asyncio.to_thread(
            self._update_data,
            "projects",
            [project.model_dump(mode="json") for project in projects],
        )

    async def list_labels(self) -> list[LabelRead]:
        raw_labels = await asyncio.to_thread(self._read_collection, "labels")
        return [LabelRead.model_validate(raw) for raw in raw_labels]

    async def replace_labels(self, labels: Sequence[LabelRead]) -> None:
        await asyncio.to_thread(
            self._update_data,
            "labels",
            [label.model_dump(mode="json") for label in labels],
        )

    async def get_settings(self) -> WorkspaceSettingsRead:
        document = await asyncio.to_thread(self._read_data)
        return WorkspaceSettingsRead.model_validate(document.get("settings") or {})

    async def save_settings(self, workspace_settings: WorkspaceSettingsRead) -> None:
        await asyncio.to_thread(
            self._update_data,
            "settings",
            workspace_settings.model_dump(mode="json", by_alias=True),
        )

    async def load_history(self) -> HistoryState:
        document = await asyncio.to_thread(self._read, self.history_path, _initial_history())
        try:
            return HistoryState.model_validate(document)
        except ValidationError as exc:
            raise StoreUnavailableError(f"Malformed history in {HISTORY_FILE_NAME}") from exc

    async def save_history(self, state: HistoryState) -> None:
        await asyncio.to_thread(
            self._write,
            self.history_path,
            state.model_dump(mode="json", by_alias=True),
        )

    async def list_activity(self, limit: int | None = None) -> list[ActivityEntryRead]:
        raw_entries = await asyncio.to_thread(self._read_activities)
        if limit is not None:
            raw_entries = raw_entries[:limit]
        try:
            return [ActivityEntryRead.model_validate(raw) for raw in raw_entries]
        except ValidationError as exc:
            raise StoreUnavailableError(f"Malformed activity in {ACTIVITY_FILE_NAME}") from exc

    async def append_activity(
        self,
        entry: ActivityEntryRead,
        *,
        max_entries: int | None,
    ) -> None:
        await asyncio.to_thread(
            self._prepend_activity,
            entry.model_dump(mode="json", by_alias=True),
            max_entries,
        )

    async def ping(self) -> None:
        await asyncio.to_thread(self._read_data)
