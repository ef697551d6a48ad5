"""Health and readiness probe response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from sqlmodel import SQLModel


class HealthStatusResponse(SQLModel):
    """Standard payload for service liveness checks."""

    ok: bool = Field(
        description="Indicates whether the probe check succeeded.",
        examples=[True],
    )


class StoreHealthResponse(SQLModel):
    """Liveness plus a connectivity probe of the configured store."""

    status: Literal["ok"] = "ok"
    database: Literal["connected", "error"] = Field(
        description="Result of a read probe against the configured storage backend.",
        examples=["connected"],
    )
