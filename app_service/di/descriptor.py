"""
Component Descriptor
====================

Immutable record of one discovered component.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ComponentKind(str, Enum):
    """Classification tag derived from the component's simple name."""
    USE_CASE = "use_case"
    SERVICE = "service"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def for_name(cls, name: str) -> "ComponentKind":
        """Classify a simple class name by its suffix."""
        if name.endswith("Case"):
            return cls.USE_CASE
        if name.endswith("Service"):
            return cls.SERVICE
        return cls.UNCLASSIFIED


@dataclass(frozen=True)
class ComponentDescriptor:
    """
    Discovered component.

    Attributes:
        namespace: Module path the class is defined in
        name: Simple class name
        component_class: The concrete class itself
        capabilities: Capability types the class satisfies, its own class last
        kind: Classification tag
    """
    namespace: str
    name: str
    component_class: type
    capabilities: Tuple[type, ...]
    kind: ComponentKind = ComponentKind.UNCLASSIFIED

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}"

    def provides(self, capability: object) -> bool:
        """Check if this component satisfies the capability type."""
        return capability in self.capabilities
