"""
Health Controller
=================

Framework default endpoints: service info and health check.
"""
from fastapi import APIRouter, Depends, Request

from app_service.api.dependencies import get_composition_root
from app_service.application.dto.health_dto import HealthResponse, ServiceInfoResponse
from app_service.di import CompositionRoot

router = APIRouter(tags=["health"])


@router.get("/", response_model=ServiceInfoResponse, summary="Service info")
async def root(request: Request) -> ServiceInfoResponse:
    """Root endpoint - service info."""
    settings = request.app.state.settings
    return ServiceInfoResponse(
        status="running",
        service=settings.app_name,
        version=settings.app_version,
    )


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(
    container: CompositionRoot = Depends(get_composition_root),
) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy" if container.is_ready else "unhealthy",
        composition=container.state.value,
        components=len(container.registry) if container.is_ready else 0,
    )
