"""Workspace settings endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from taskflow.api.deps import get_catalog_service
from taskflow.schemas.catalog import WorkspaceSettingsRead, WorkspaceSettingsUpdate
from taskflow.services.catalog import CatalogService

router = APIRouter(prefix="/settings", tags=["settings"])
CATALOG_DEP = Depends(get_catalog_service)


@router.get("", response_model=WorkspaceSettingsRead)
async def get_settings(catalog: CatalogService = CATALOG_DEP) -> WorkspaceSettingsRead:
    return await catalog.get_settings()


@router.put("", response_model=WorkspaceSettingsRead)
async def update_settings(
    payload: WorkspaceSettingsUpdate,
    catalog: CatalogService = CATALOG_DEP,
) -> WorkspaceSettingsRead:
    """Merge the supplied keys over the stored settings."""
    return await catalog.update_settings(payload)
