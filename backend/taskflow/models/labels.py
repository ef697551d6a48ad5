"""Label table."""

from __future__ import annotations

from sqlmodel import Field, SQLModel


class Label(SQLModel, table=True):
    """Flat name/color label vocabulary."""

    __tablename__ = "labels"  # pyright: ignore[reportAssignmentType]

    id: str = Field(primary_key=True)
    position: int = Field(default=0)
    name: str = ""
    color: str = "#4A90D9"
