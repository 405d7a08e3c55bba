"""
API v1 Package
===============

Version 1 API controllers.
"""
from .health_controller import router as health_router

__all__ = ["health_router"]
