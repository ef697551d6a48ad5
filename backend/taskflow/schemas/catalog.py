"""Schemas for projects, labels, and workspace settings."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from taskflow.schemas.tasks import DEFAULT_PROJECT_ID, DEFAULT_TASK_COLOR


class ProjectRead(BaseModel):
    """Project payload returned by read endpoints and stored in snapshots."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = "New Project"
    description: str = ""
    color: str = DEFAULT_TASK_COLOR


class ProjectCreate(BaseModel):
    """Payload for creating a project."""

    name: str | None = None
    description: str | None = None
    color: str | None = None


class ProjectUpdate(BaseModel):
    """Payload for a partial project update."""

    name: str | None = None
    description: str | None = None
    color: str | None = None


class LabelRead(BaseModel):
    """Label payload; labels are a flat name/color vocabulary."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = ""
    color: str = DEFAULT_TASK_COLOR


class LabelCreate(BaseModel):
    """Payload for creating a label; the id is generated when omitted."""

    id: str | None = Field(default=None, min_length=1)
    name: str = ""
    color: str | None = None


DEFAULT_PROJECT = ProjectRead(
    id=DEFAULT_PROJECT_ID,
    name="My Project",
    description="Default project",
    color=DEFAULT_TASK_COLOR,
)

DEFAULT_LABELS: tuple[LabelRead, ...] = (
    LabelRead(id="bug", name="Bug", color="#E74C3C"),
    LabelRead(id="feature", name="Feature", color="#50C878"),
    LabelRead(id="improvement", name="Improvement", color="#4A90D9"),
    LabelRead(id="urgent", name="Urgent", color="#FF6B6B"),
    LabelRead(id="review", name="Review", color="#9B59B6"),
    LabelRead(id="testing", name="Testing", color="#FFB347"),
    LabelRead(id="documentation", name="Documentation", color="#3498DB"),
    LabelRead(id="meeting", name="Meeting", color="#4ECDC4"),
)


class WorkspaceSettingsRead(BaseModel):
    """Workspace-level UI and classifier preferences."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    theme: str = "dark"
    default_view: str = Field(default="gantt", alias="defaultView")
    show_weekends: bool = Field(default=True, alias="showWeekends")
    work_hours_start: int = Field(default=9, ge=0, le=24, alias="workHoursStart")
    work_hours_end: int = Field(default=17, ge=0, le=24, alias="workHoursEnd")
    enable_ai: bool = Field(default=True, alias="enableAI")
    auto_classify: bool = Field(default=True, alias="autoClassify")

    @property
    def classifier_enabled(self) -> bool:
        """Whether omitted task fields should be filled by the classifier."""
        return self.enable_ai and self.auto_classify


class WorkspaceSettingsUpdate(BaseModel):
    """Partial settings update; omitted keys keep their stored value."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    theme: str | None = None
    default_view: str | None = Field(default=None, alias="defaultView")
    show_weekends: bool | None = Field(default=None, alias="showWeekends")
    work_hours_start: int | None = Field(default=None, ge=0, le=24, alias="workHoursStart")
    work_hours_end: int | None = Field(default=None, ge=0, le=24, alias="workHoursEnd")
    enable_ai: bool | None = Field(default=None, alias="enableAI")
    auto_classify: bool | None = Field(default=None, alias="autoClassify")
