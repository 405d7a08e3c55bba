"""
Service Bootstrap
=================

Process entry point: loads settings, runs the single component scan that
builds the composition root, then hands control to the web runtime.

Startup sequence:
1. Load settings and configure logging
2. Scan declared namespaces and wire every component (fail fast)
3. Build the FastAPI application around the ready composition root
4. Run uvicorn until externally terminated
"""
import logging
import sys
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app_service.api.v1 import health_router
from app_service.core.config import Settings, get_settings
from app_service.core.log_config import setup_logging
from app_service.di import (
    CompositionError,
    CompositionRoot,
    LayerPolicy,
    NamePatternRule,
    init_container,
)

logger = logging.getLogger(__name__)


def create_container(settings: Settings) -> CompositionRoot:
    """
    Build (without composing) the composition root described by the settings.

    Args:
        settings: Application settings

    Returns:
        Uninitialized CompositionRoot with Settings bound as a provided instance

    Raises:
        ScanConfigurationError: If namespaces are empty or the pattern is malformed
    """
    return CompositionRoot(
        namespaces=settings.scan_namespaces,
        pattern=NamePatternRule.from_regex(settings.scan_pattern),
        instances={Settings: settings},
        layer_policy=LayerPolicy() if settings.enforce_layers else None,
    )


def create_application(
    container: CompositionRoot,
    settings: Optional[Settings] = None,
    arguments: Sequence[str] = (),
) -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - The ready composition root (app.state.container)
    - CORS middleware for the configured origins (none by default)
    - Framework default routes (root and health)

    Args:
        container: Composition root in READY state
        settings: Application settings (default: get_settings())
        arguments: Process arguments, kept unchanged on app.state.arguments

    Returns:
        Configured FastAPI application instance

    Raises:
        CompositionError: If the container is not ready
    """
    if not container.is_ready:
        raise CompositionError(
            f"Application requires a ready composition root, got state {container.state.value}"
        )
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Application archetype: ports and adapters service with component discovery",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if settings.cors_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    application.state.container = container
    application.state.settings = settings
    application.state.arguments = tuple(arguments)

    application.include_router(health_router)

    return application


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Start the service.

    Args:
        argv: Process arguments (default: sys.argv[1:]), passed through unchanged

    Returns:
        Exit status: 1 if composition failed, 0 after the server stops
    """
    arguments = list(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        container = init_container(create_container(settings))
    except CompositionError as e:
        logger.error(f"Startup aborted, components are not wired: {e}")
        return 1

    application = create_application(container, settings, arguments)
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    uvicorn.run(application, host=settings.host, port=settings.port, log_config=None)
    return 0
