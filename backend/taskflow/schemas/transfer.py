"""Schemas for JSON export and import."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskflow.schemas.catalog import LabelRead, ProjectRead, WorkspaceSettingsRead
from taskflow.schemas.tasks import TaskRecord


class ExportDocument(BaseModel):
    """Full workspace export."""

    model_config = ConfigDict(populate_by_name=True)

    tasks: list[TaskRecord]
    projects: list[ProjectRead]
    labels: list[LabelRead]
    settings: WorkspaceSettingsRead
    exported_at: datetime = Field(alias="exportedAt")


class ImportPayload(BaseModel):
    """Full-replace import; projects and labels are replaced only when present."""

    model_config = ConfigDict(extra="ignore")

    tasks: list[dict[str, Any]]
    projects: list[ProjectRead] | None = None
    labels: list[LabelRead] | None = None


class ImportResult(BaseModel):
    """Outcome of an import."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    task_count: int = Field(alias="taskCount")
