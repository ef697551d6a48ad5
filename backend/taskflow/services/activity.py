"""Task activity feed; write failures never fail the triggering mutation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from taskflow.core.logging import get_logger
from taskflow.schemas.activity import ActivityEntryRead
from taskflow.services.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from taskflow.db.store import TaskflowStore

logger = get_logger(__name__)

DEFAULT_ACTIVITY_LIMIT = 50


class ActivityLog:
    """Newest-first feed of task lifecycle events."""

    def __init__(self, store: TaskflowStore, *, max_entries: int | None = None) -> None:
        self._store = store
        self.max_entries = max_entries

    async def append(
        self,
        action: str,
        task_id: str | None,
        task_name: str | None,
        details: dict[str, Any] | None = None,
    ) -> ActivityEntryRead | None:
        """Record an event, returning `None` when the store rejected the write."""
        entry = ActivityEntryRead(
            action=action,
            task_id=task_id,
            task_name=task_name,
            details=details or {},
        )
        try:
            await self._store.append_activity(entry, max_entries=self.max_entries)
        except StoreUnavailableError as exc:
            logger.warning(
                "activity.append.failed",
                extra={"activity_action": action, "task_id": task_id, "error": exc.detail},
            )
            return None
        return entry

    async def recent(self, limit: int | None = DEFAULT_ACTIVITY_LIMIT) -> list[ActivityEntryRead]:
        return await self._store.list_activity(limit)
