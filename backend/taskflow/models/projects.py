"""Project table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from taskflow.core.time import utcnow

RUNTIME_ANNOTATION_TYPES = (datetime,)


class Project(SQLModel, table=True):
    """Project grouping tasks; the default project uses a fixed storage id."""

    __tablename__ = "projects"  # pyright: ignore[reportAssignmentType]

    id: str = Field(primary_key=True)
    position: int = Field(default=0)
    name: str
    description: str = ""
    color: str = "#4A90D9"
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
