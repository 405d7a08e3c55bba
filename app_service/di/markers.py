"""
Capability markers
------------------

Decorators that let classes declare capabilities the scanner cannot infer
from inheritance alone.
"""
from typing import Callable, Tuple, TypeVar

ComponentType = TypeVar("ComponentType", bound=type)

PROVIDES_ATTR = "__provides__"
MULTIPLE_ATTR = "__allow_multiple__"


def implements(*capabilities: type) -> Callable[[ComponentType], ComponentType]:
    """
    Decorator to declare the capability types a component satisfies.
    Useful for structural ports (typing.Protocol) the class does not subclass.
    """
    if not capabilities:
        raise TypeError("implements() needs at least one capability type")

    def decorator(component_class: ComponentType) -> ComponentType:
        # Only the class' own declaration counts, not an inherited one
        declared: Tuple[type, ...] = component_class.__dict__.get(PROVIDES_ATTR, ())
        setattr(component_class, PROVIDES_ATTR, declared + tuple(
            capability for capability in capabilities if capability not in declared
        ))
        return component_class
    return decorator


def allow_multiple(port: ComponentType) -> ComponentType:
    """Mark a port as accepting several implementations."""
    setattr(port, MULTIPLE_ATTR, True)
    return port


def declared_capabilities(component_class: type) -> Tuple[type, ...]:
    return component_class.__dict__.get(PROVIDES_ATTR, ())


def is_multiple(capability: object) -> bool:
    # Looked up on the port itself so subclasses do not inherit the flag
    return bool(getattr(capability, "__dict__", {}).get(MULTIPLE_ATTR, False))
