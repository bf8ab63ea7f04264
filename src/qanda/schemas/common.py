"""Common Pydantic schemas for JSON responses."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    service: str = Field(..., examples=["qanda"])
    version: str = Field(..., examples=["0.1.0"])
