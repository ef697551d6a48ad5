"""Projects, labels, and workspace settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskflow.core.logging import get_logger
from taskflow.schemas.catalog import LabelRead, ProjectRead, WorkspaceSettingsRead
from taskflow.schemas.tasks import DEFAULT_PROJECT_ID
from taskflow.services.exceptions import NotFoundError, ProtectedResourceError

if TYPE_CHECKING:
    from taskflow.db.store import TaskflowStore
    from taskflow.schemas.catalog import (
        LabelCreate,
        ProjectCreate,
        ProjectUpdate,
        WorkspaceSettingsUpdate,
    )
    from taskflow.services.tasks import TaskService

logger = get_logger(__name__)


class CatalogService:
    """Project, label, and settings operations."""

    def __init__(self, store: TaskflowStore, *, tasks: TaskService) -> None:
        self._store = store
        self._tasks = tasks

    async def list_projects(self) -> list[ProjectRead]:
        return await self._store.list_projects()

    async def create_project(self, payload: ProjectCreate) -> ProjectRead:
        project = ProjectRead.model_validate(payload.model_dump(exclude_none=True))
        projects = await self._store.list_projects()
        await self._store.replace_projects([*projects, project])
        logger.info("projects.created", extra={"project_id": project.id})
        return project

    async def update_project(self, project_id: str, payload: ProjectUpdate) -> ProjectRead:
        projects = await self._store.list_projects()
        index = next((i for i, p in enumerate(projects) if p.id == project_id), None)
        if index is None:
            raise NotFoundError("Project not found")
        updated = projects[index].model_copy(update=payload.model_dump(exclude_none=True))
        projects[index] = updated
        await self._store.replace_projects(projects)
        return updated

    async def delete_project(self, project_id: str) -> None:
        """Delete a project and move its tasks to the default project."""
        if project_id == DEFAULT_PROJECT_ID:
            raise ProtectedResourceError("Cannot delete default project")
        projects = await self._store.list_projects()
        await self._store.replace_projects([p for p in projects if p.id != project_id])

        tasks = await self._tasks.list_tasks()
        if any(task.project_id == project_id for task in tasks):
            reassigned = [
                task.model_copy(update={"project_id": DEFAULT_PROJECT_ID})
                if task.project_id == project_id
                else task
                for task in tasks
            ]
            await self._tasks.replace_all("delete_project", reassigned)
        logger.info("projects.deleted", extra={"project_id": project_id})

    async def list_labels(self) -> list[LabelRead]:
        return await self._store.list_labels()

    async def create_label(self, payload: LabelCreate) -> LabelRead:
        label = LabelRead.model_validate(payload.model_dump(exclude_none=True))
        labels = await self._store.list_labels()
        await self._store.replace_labels([*labels, label])
        return label

    async def get_settings(self) -> WorkspaceSettingsRead:
        return await self._store.get_settings()

    async def update_settings(self, payload: WorkspaceSettingsUpdate) -> WorkspaceSettingsRead:
        """Merge supplied keys over the stored settings."""
        current = await self._store.get_settings()
        updated = WorkspaceSettingsRead.model_validate(
            {**current.model_dump(), **payload.model_dump(exclude_none=True)},
        )
        await self._store.save_settings(updated)
        return updated
