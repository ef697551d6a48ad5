# ruff: noqa: INP001
from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskflow.core.config import FILE_ACTIVITY_MAX_ENTRIES, Settings
from taskflow.core.storage_backend import StorageBackend


def test_file_backend_caps_activity_by_default() -> None:
    settings = Settings(_env_file=None, storage_backend=StorageBackend.FILE)

    assert settings.activity_max_entries == FILE_ACTIVITY_MAX_ENTRIES


def test_database_backend_keeps_all_activity_by_default() -> None:
    settings = Settings(_env_file=None, storage_backend=StorageBackend.DATABASE)

    assert settings.activity_max_entries is None


def test_explicit_activity_cap_wins() -> None:
    settings = Settings(_env_file=None, storage_backend="file", activity_max_entries=5)

    assert settings.activity_max_entries == 5


def test_dev_environment_enables_migrations(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DB_AUTO_MIGRATE", raising=False)

    assert Settings(_env_file=None, environment="dev").db_auto_migrate is True
    assert Settings(_env_file=None, environment="prod").db_auto_migrate is False


def test_invalid_log_format_is_rejected() -> None:
    with pytest.raises(ValidationError, match="LOG_FORMAT"):
        Settings(_env_file=None, log_format="xml")


def test_history_capacity_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, history_capacity=0)
