"""Shared storage-backend enum values."""

from __future__ import annotations

from enum import Enum


class StorageBackend(str, Enum):
    """Supported persistence backends for tasks, history, and activity."""

    FILE = "file"
    DATABASE = "database"
