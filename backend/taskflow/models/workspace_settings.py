"""Single-row workspace settings table."""

from __future__ import annotations

from sqlmodel import Field, SQLModel

WORKSPACE_SETTINGS_ROW_ID = 1


class WorkspaceSettings(SQLModel, table=True):
    """Workspace UI and classifier preferences."""

    __tablename__ = "workspace_settings"  # pyright: ignore[reportAssignmentType]

    id: int = Field(default=WORKSPACE_SETTINGS_ROW_ID, primary_key=True)
    theme: str = "dark"
    default_view: str = "gantt"
    show_weekends: bool = True
    work_hours_start: int = 9
    work_hours_end: int = 17
    enable_ai: bool = True
    auto_classify: bool = True
