"""Reusable FastAPI dependencies that assemble stores and services per request."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from taskflow.core.config import settings
from taskflow.core.storage_backend import StorageBackend
from taskflow.db.json_store import JsonFileStore
from taskflow.db.session import get_session
from taskflow.db.sql_store import SqlStore
from taskflow.db.store import TaskflowStore
from taskflow.services.activity import ActivityLog
from taskflow.services.catalog import CatalogService
from taskflow.services.history import HistoryLog
from taskflow.services.tasks import TaskService
from taskflow.services.transfer import TransferService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

SESSION_DEP = Depends(get_session)


async def get_store(session: AsyncSession = SESSION_DEP) -> AsyncIterator[TaskflowStore]:
    """Yield the configured store for one request."""
    if settings.storage_backend == StorageBackend.DATABASE:
        yield SqlStore(session)
        return
    yield JsonFileStore(settings.data_dir)


STORE_DEP = Depends(get_store)


def get_history_log(store: TaskflowStore = STORE_DEP) -> HistoryLog:
    return HistoryLog(store, capacity=settings.history_capacity)


def get_activity_log(store: TaskflowStore = STORE_DEP) -> ActivityLog:
    return ActivityLog(store, max_entries=settings.activity_max_entries)


HISTORY_DEP = Depends(get_history_log)
ACTIVITY_DEP = Depends(get_activity_log)


def get_task_service(
    store: TaskflowStore = STORE_DEP,
    history: HistoryLog = HISTORY_DEP,
    activity: ActivityLog = ACTIVITY_DEP,
) -> TaskService:
    """Build the task repository over the request's store."""
    return TaskService(store, history=history, activity=activity)


TASK_SERVICE_DEP = Depends(get_task_service)


def get_catalog_service(
    store: TaskflowStore = STORE_DEP,
    tasks: TaskService = TASK_SERVICE_DEP,
) -> CatalogService:
    return CatalogService(store, tasks=tasks)


def get_transfer_service(
    store: TaskflowStore = STORE_DEP,
    tasks: TaskService = TASK_SERVICE_DEP,
) -> TransferService:
    return TransferService(store, tasks=tasks)
