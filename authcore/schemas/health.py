"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database reachability for the auth service."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    timestamp: datetime = Field(description="Server time (UTC) when the check ran")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Whether the credential/session database answered SELECT 1",
    )
