"""FastAPI application entrypoint and router wiring for the backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

from taskflow.api.activity import router as activity_router
from taskflow.api.ai import router as ai_router
from taskflow.api.health import router as health_router
from taskflow.api.history import router as history_router
from taskflow.api.insights import router as insights_router
from taskflow.api.labels import router as labels_router
from taskflow.api.projects import router as projects_router
from taskflow.api.settings import router as settings_router
from taskflow.api.tasks import router as tasks_router
from taskflow.api.transfer import router as transfer_router
from taskflow.core.config import settings
from taskflow.core.error_handling import install_error_handling
from taskflow.core.logging import configure_logging, get_logger
from taskflow.core.storage_backend import StorageBackend
from taskflow.db.json_store import JsonFileStore
from taskflow.db.session import init_db
from taskflow.schemas.health import HealthStatusResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

configure_logging()
logger = get_logger(__name__)
OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and store connectivity probes."},
    {
        "name": "tasks",
        "description": "Task CRUD, cascading delete, batch edits, time logging, and auto-move.",
    },
    {"name": "ai", "description": "Keyword classification and rule-based suggestions."},
    {"name": "projects", "description": "Project CRUD; the default project cannot be deleted."},
    {"name": "labels", "description": "Label vocabulary endpoints."},
    {"name": "settings", "description": "Workspace preference read/update endpoints."},
    {"name": "activity", "description": "Newest-first task activity feed."},
    {"name": "history", "description": "Undo/redo over task-collection snapshots."},
    {"name": "transfer", "description": "JSON/CSV export and JSON import."},
    {"name": "insights", "description": "Aggregate statistics and dashboard payloads."},
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Initialize the configured store before serving requests."""
    logger.info(
        "app.lifecycle.starting environment=%s storage_backend=%s db_auto_migrate=%s",
        settings.environment,
        settings.storage_backend.value,
        settings.db_auto_migrate,
    )
    if settings.storage_backend == StorageBackend.DATABASE:
        await init_db()
    else:
        # Reading once creates the seed documents on first start.
        await JsonFileStore(settings.data_dir).ping()
    logger.info("app.lifecycle.started")
    try:
        yield
    finally:
        logger.info("app.lifecycle.stopped")


app = FastAPI(
    title="Task Flow API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=OPENAPI_TAGS,
)

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )
    logger.info("app.cors.enabled origins_count=%s", len(origins))
else:
    logger.info("app.cors.disabled")

install_error_handling(app)


@app.get(
    "/healthz",
    tags=["health"],
    response_model=HealthStatusResponse,
    summary="Liveness Check",
    description="Lightweight liveness probe endpoint.",
    responses={
        status.HTTP_200_OK: {
            "description": "Service is alive.",
            "content": {"application/json": {"example": {"ok": True}}},
        }
    },
)
def healthz() -> HealthStatusResponse:
    """Lightweight liveness probe endpoint."""
    return HealthStatusResponse(ok=True)


api = APIRouter(prefix="/api")
api.include_router(health_router)
api.include_router(tasks_router)
api.include_router(ai_router)
api.include_router(projects_router)
api.include_router(labels_router)
api.include_router(settings_router)
api.include_router(activity_router)
api.include_router(history_router)
api.include_router(transfer_router)
api.include_router(insights_router)
app.include_router(api)

logger.debug("app.routes.registered count=%s", len(app.routes))
