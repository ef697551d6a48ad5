"""Label endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from taskflow.api.deps import get_catalog_service
from taskflow.schemas.catalog import LabelCreate, LabelRead
from taskflow.services.catalog import CatalogService

router = APIRouter(prefix="/labels", tags=["labels"])
CATALOG_DEP = Depends(get_catalog_service)


@router.get("", response_model=list[LabelRead])
async def list_labels(catalog: CatalogService = CATALOG_DEP) -> list[LabelRead]:
    return await catalog.list_labels()


@router.post("", response_model=LabelRead, status_code=status.HTTP_201_CREATED)
async def create_label(
    payload: LabelCreate,
    catalog: CatalogService = CATALOG_DEP,
) -> LabelRead:
    return await catalog.create_label(payload)
