"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )
    signup_policy: str | None = Field(
        default=None,
        description="Active SIGNUP_APPROVAL_POLICY, so the web client can word its signup screen",
    )
