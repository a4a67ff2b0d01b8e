"""Pydantic models for response validation."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response with view manager state."""

    status: str = Field(..., description="Overall status")
    version: str = Field(..., description="Application version")
    production: bool = Field(..., description="Whether templates are cached once or reloaded per render")
    template_count: int = Field(..., description="Number of pages in the template cache")


class ErrorResponse(BaseModel):
    """Error response body."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
