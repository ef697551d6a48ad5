"""Storage interface shared by the JSON-file and relational backends.

Every collection is read and written wholesale: services load a collection,
change it in memory, and hand the complete result back. There is no locking
and no cross-collection transaction; concurrent writers can lose updates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taskflow.schemas.activity import ActivityEntryRead
    from taskflow.schemas.catalog import LabelRead, ProjectRead, WorkspaceSettingsRead
    from taskflow.schemas.history import HistoryState
    from taskflow.schemas.tasks import TaskRecord


class TaskflowStore(ABC):
    """Persistence for tasks, projects, labels, settings, history, and activity."""

    @abstractmethod
    async def list_tasks(self) -> list[TaskRecord]:
        """Return the task collection in stored order."""

    @abstractmethod
    async def replace_tasks(self, tasks: Sequence[TaskRecord]) -> None:
        """Persist `tasks` as the complete task collection."""

    @abstractmethod
    async def list_projects(self) -> list[ProjectRead]: ...

    @abstractmethod
    async def replace_projects(self, projects: Sequence[ProjectRead]) -> None: ...

    @abstractmethod
    async def list_labels(self) -> list[LabelRead]: ...

    @abstractmethod
    async def replace_labels(self, labels: Sequence[LabelRead]) -> None: ...

    @abstractmethod
    async def get_settings(self) -> WorkspaceSettingsRead: ...

    @abstractmethod
    async def save_settings(self, workspace_settings: WorkspaceSettingsRead) -> None: ...

    @abstractmethod
    async def load_history(self) -> HistoryState:
        """Return both undo/redo stacks."""

    @abstractmethod
    async def save_history(self, state: HistoryState) -> None: ...

    @abstractmethod
    async def list_activity(self, limit: int | None = None) -> list[ActivityEntryRead]:
        """Return activity entries newest first, at most `limit` when given."""

    @abstractmethod
    async def append_activity(
        self,
        entry: ActivityEntryRead,
        *,
        max_entries: int | None,
    ) -> None:
        """Prepend `entry`, dropping the oldest entries beyond `max_entries`."""

    @abstractmethod
    async def ping(self) -> None:
        """Raise `StoreUnavailableError` when the backing store cannot be read."""
