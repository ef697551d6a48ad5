"""Keyword classification and rule-based suggestion endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from taskflow.api.deps import TASK_SERVICE_DEP
from taskflow.core.time import utc_today
from taskflow.schemas.ai import ClassificationRead, ClassificationRequest, SuggestionRead
from taskflow.services.classifier import classify
from taskflow.services.suggestions import generate_suggestions
from taskflow.services.tasks import TaskService

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/classify", response_model=ClassificationRead)
def classify_text(payload: ClassificationRequest) -> ClassificationRead:
    """Infer category, priority, effort, and tags from free text."""
    result = classify(payload.name, payload.description)
    return ClassificationRead(
        category=result.category,
        priority=result.priority,
        estimated_hours=result.estimated_hours,
        tags=result.tags,
    )


@router.get("/suggestions", response_model=list[SuggestionRead])
async def list_suggestions(service: TaskService = TASK_SERVICE_DEP) -> list[SuggestionRead]:
    """Return overdue/due-today/priority/stalled alerts or a progress summary."""
    return generate_suggestions(await service.list_tasks(), utc_today())
