"""
Dependency Helpers
==================

Bridge between FastAPI's Depends() and the composition root.
Endpoints declare the port they need; the root supplies the implementation.

    @router.post("/orders")
    async def place(placer: Placer = Depends(provide(Placer))):
        ...
"""
from typing import Callable, Type, TypeVar

from fastapi import Request

from app_service.di import CompositionError, CompositionRoot

TypeVarType = TypeVar("TypeVarType")


def get_composition_root(request: Request) -> CompositionRoot:
    """
    Get the composition root bound to the running application.

    Returns:
        CompositionRoot instance

    Raises:
        CompositionError: If the application was not created by bootstrap
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise CompositionError("Application has no composition root attached")
    return container


def provide(capability: Type[TypeVarType]) -> Callable[[Request], TypeVarType]:
    """
    Build a FastAPI dependency resolving a capability type.

    Args:
        capability: Port to resolve

    Returns:
        Callable usable with Depends()
    """
    def dependency(request: Request) -> TypeVarType:
        return get_composition_root(request).resolve(capability)

    dependency.__name__ = f"provide_{capability.__name__}"
    return dependency
