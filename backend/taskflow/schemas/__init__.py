"""Public schema exports shared across API route modules."""

from taskflow.schemas.activity import ActivityEntryRead
from taskflow.schemas.ai import ClassificationRead, ClassificationRequest, SuggestionRead
from taskflow.schemas.catalog import (
    LabelCreate,
    LabelRead,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    WorkspaceSettingsRead,
    WorkspaceSettingsUpdate,
)
from taskflow.schemas.history import HistoryStatusRead, UndoRedoRead
from taskflow.schemas.insights import DashboardRead, StatsRead
from taskflow.schemas.tasks import (
    TaskBatchUpdate,
    TaskBulkUpdateItem,
    TaskCreate,
    TaskRecord,
    TaskUpdate,
    TimeLogCreate,
)
from taskflow.schemas.transfer import ImportPayload, ImportResult

__all__ = [
    "ActivityEntryRead",
    "ClassificationRead",
    "ClassificationRequest",
    "DashboardRead",
    "HistoryStatusRead",
    "ImportPayload",
    "ImportResult",
    "LabelCreate",
    "LabelRead",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "StatsRead",
    "SuggestionRead",
    "TaskBatchUpdate",
    "TaskBulkUpdateItem",
    "TaskCreate",
    "TaskRecord",
    "TaskUpdate",
    "TimeLogCreate",
    "UndoRedoRead",
    "WorkspaceSettingsRead",
    "WorkspaceSettingsUpdate",
]
