"""Project endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from taskflow.api.deps import get_catalog_service
from taskflow.schemas.catalog import ProjectCreate, ProjectRead, ProjectUpdate
from taskflow.services.catalog import CatalogService

router = APIRouter(prefix="/projects", tags=["projects"])
CATALOG_DEP = Depends(get_catalog_service)


@router.get("", response_model=list[ProjectRead])
async def list_projects(catalog: CatalogService = CATALOG_DEP) -> list[ProjectRead]:
    return await catalog.list_projects()


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    catalog: CatalogService = CATALOG_DEP,
) -> ProjectRead:
    return await catalog.create_project(payload)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    catalog: CatalogService = CATALOG_DEP,
) -> ProjectRead:
    return await catalog.update_project(project_id, payload)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, catalog: CatalogService = CATALOG_DEP) -> None:
    """Delete a project; its tasks move to the default project."""
    await catalog.delete_project(project_id)
