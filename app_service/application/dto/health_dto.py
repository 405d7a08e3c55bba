"""
Health DTO
==========

Pydantic models for the framework default endpoints.
"""
from pydantic import BaseModel, Field


class ServiceInfoResponse(BaseModel):
    """DTO for the root endpoint."""
    status: str = Field(..., description="Process status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    docs: str = Field("/docs", description="OpenAPI docs location")


class HealthResponse(BaseModel):
    """DTO for the health endpoint."""
    status: str = Field(..., description="'healthy' once components are wired")
    composition: str = Field(..., description="Composition root state")
    components: int = Field(..., description="Number of wired components")
