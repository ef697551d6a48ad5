"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from taskflow.models.activity_log import ActivityLogEntry
from taskflow.models.history_entries import HistoryRow
from taskflow.models.labels import Label
from taskflow.models.projects import Project
from taskflow.models.tasks import Task
from taskflow.models.workspace_settings import WorkspaceSettings

__all__ = [
    "ActivityLogEntry",
    "HistoryRow",
    "Label",
    "Project",
    "Task",
    "WorkspaceSettings",
]
