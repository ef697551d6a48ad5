# ruff: noqa: INP001
"""Pytest configuration shared across backend tests."""

from __future__ import annotations

import os
import sys
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Deterministic import-time settings regardless of shell env: file storage,
# an in-memory SQLite URL so no PostgreSQL driver is touched, no migrations.
os.environ["ENVIRONMENT"] = "test"
os.environ["STORAGE_BACKEND"] = "file"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_AUTO_MIGRATE"] = "false"
os.environ["CORS_ORIGINS"] = ""

from taskflow.db.json_store import JsonFileStore  # noqa: E402
from taskflow.services.activity import ActivityLog  # noqa: E402
from taskflow.services.history import HistoryLog  # noqa: E402
from taskflow.services.tasks import TaskService  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Callable

TODAY = date(2026, 3, 10)


def fixed_today() -> date:
    return TODAY


@pytest.fixture
def file_store(tmp_path: Path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "data")


@pytest.fixture
def make_service() -> Callable[..., TaskService]:
    def _make(store, *, capacity: int = 50, max_entries: int | None = 200) -> TaskService:
        return TaskService(
            store,
            history=HistoryLog(store, capacity=capacity),
            activity=ActivityLog(store, max_entries=max_entries),
            today=fixed_today,
        )

    return _make


@pytest.fixture
def task_service(file_store: JsonFileStore, make_service) -> TaskService:
    return make_service(file_store)
