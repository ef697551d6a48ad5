"""Export and import endpoints."""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse, Response

from taskflow.api.deps import get_transfer_service
from taskflow.schemas.transfer import ImportPayload, ImportResult
from taskflow.services.transfer import TransferService

router = APIRouter(tags=["transfer"])
TRANSFER_DEP = Depends(get_transfer_service)


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f"attachment; filename={filename}"}


@router.get("/export", response_model=None)
async def export_workspace(
    export_format: Literal["json", "csv"] = Query(default="json", alias="format"),
    transfer: TransferService = TRANSFER_DEP,
) -> Response:
    """Download the workspace as JSON or the task list as CSV."""
    if export_format == "csv":
        return Response(
            content=await transfer.export_csv(),
            media_type="text/csv",
            headers=_attachment("tasks.csv"),
        )
    document = await transfer.export_document()
    return JSONResponse(
        content=document.model_dump(mode="json", by_alias=True),
        headers=_attachment("tasks.json"),
    )


@router.post("/import", response_model=ImportResult)
async def import_workspace(
    payload: ImportPayload | list[dict[str, Any]] = Body(...),
    transfer: TransferService = TRANSFER_DEP,
) -> ImportResult:
    """Replace the workspace from an export document, or merge a bare task array by id."""
    if isinstance(payload, ImportPayload):
        return await transfer.import_document(payload)
    return await transfer.import_tasks(payload)
