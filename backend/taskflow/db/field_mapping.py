"""Static translation table between wire task fields and storage columns.

The web client speaks camelCase (`start`, `projectId`, `estimatedHours`);
the relational schema uses snake_case columns (`start_date`, `project_id`,
`estimated_hours`). The logical `default` project is stored under a fixed
UUID so relational project ids stay uniform.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, NamedTuple

from taskflow.schemas.tasks import DEFAULT_PROJECT_ID, TaskRecord

if TYPE_CHECKING:
    from taskflow.models.tasks import Task

DEFAULT_PROJECT_STORAGE_ID: Final = "00000000-0000-0000-0000-000000000001"


class FieldMapping(NamedTuple):
    """One wire key and the storage column that holds it."""

    wire: str
    column: str


TASK_FIELD_MAP: Final[tuple[FieldMapping, ...]] = (
    FieldMapping("id", "id"),
    FieldMapping("name", "name"),
    FieldMapping("description", "description"),
    FieldMapping("start", "start_date"),
    FieldMapping("end", "end_date"),
    FieldMapping("progress", "progress"),
    FieldMapping("type", "type"),
    FieldMapping("status", "status"),
    FieldMapping("priority", "priority"),
    FieldMapping("category", "category"),
    FieldMapping("color", "color"),
    FieldMapping("projectId", "project_id"),
    FieldMapping("parentId", "parent_id"),
    FieldMapping("dependencies", "dependencies"),
    FieldMapping("assignee", "assignee"),
    FieldMapping("tags", "tags"),
    FieldMapping("estimatedHours", "estimated_hours"),
    FieldMapping("actualHours", "actual_hours"),
    FieldMapping("scheduledDate", "scheduled_date"),
    FieldMapping("reminderTime", "reminder_time"),
    FieldMapping("reminderEnabled", "reminder_enabled"),
    FieldMapping("dueReminder", "due_reminder"),
    FieldMapping("recurring", "recurring"),
)

WIRE_TO_COLUMN: Final[dict[str, str]] = {m.wire: m.column for m in TASK_FIELD_MAP}
COLUMN_TO_WIRE: Final[dict[str, str]] = {m.column: m.wire for m in TASK_FIELD_MAP}


def to_storage_project_id(project_id: str) -> str:
    """Map the logical default project id to its fixed storage id."""
    if project_id == DEFAULT_PROJECT_ID:
        return DEFAULT_PROJECT_STORAGE_ID
    return project_id


def from_storage_project_id(project_id: str | None) -> str:
    """Map a stored project id back to the logical id the client uses."""
    if not project_id or project_id == DEFAULT_PROJECT_STORAGE_ID:
        return DEFAULT_PROJECT_ID
    return project_id


def task_to_columns(task: TaskRecord) -> dict[str, Any]:
    """Return column values for a validated task."""
    wire = task.model_dump(by_alias=True)
    columns = {mapping.column: wire[mapping.wire] for mapping in TASK_FIELD_MAP}
    columns["project_id"] = to_storage_project_id(task.project_id)
    # Copy mutable values so the row never aliases the caller's record.
    columns["dependencies"] = list(task.dependencies)
    columns["tags"] = list(task.tags)
    columns["recurring"] = dict(task.recurring) if task.recurring is not None else None
    return columns


def task_from_row(row: Task) -> TaskRecord:
    """Build the validated wire-side task from a stored row."""
    wire = {mapping.wire: getattr(row, mapping.column) for mapping in TASK_FIELD_MAP}
    wire["projectId"] = from_storage_project_id(row.project_id)
    wire["dependencies"] = list(row.dependencies or [])
    wire["tags"] = list(row.tags or [])
    return TaskRecord.model_validate(wire)
