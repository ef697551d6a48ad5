"""Schemas for keyword classification and rule-based suggestions."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

SuggestionType = Literal["warning", "info", "suggestion"]


class ClassificationRequest(BaseModel):
    """Free text to classify; non-string values are treated as empty."""

    name: Any = ""
    description: Any = ""


class ClassificationRead(BaseModel):
    """Category, priority, effort, and tags inferred from task text."""

    model_config = ConfigDict(populate_by_name=True)

    category: str
    priority: str
    estimated_hours: float = Field(alias="estimatedHours")
    tags: list[str] = Field(default_factory=list)


class SuggestionRead(BaseModel):
    """One actionable hint derived from the task collection."""

    type: SuggestionType
    title: str
    message: str
    action: str | None = None
    tasks: list[str] | None = None

    @model_serializer(mode="wrap")
    def _omit_unset_links(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Summary hints carry neither an action nor task ids.
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}
