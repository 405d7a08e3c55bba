"""
Layer Policy
============

Structural check of the layering convention:

    domain       <- pure business model, depends on nothing else
    ports        <- capability contracts, may use the domain
    application  <- use cases and services, orchestrate ports
    adapters     <- driving (inbound) and driven (outbound) implementations

A type's layer is the first of these names found in its module path,
so "app_service.adapters.driven.s3" is in the adapters layer.
Types outside every layer (settings, framework classes) are unrestricted.
"""
from typing import Dict, FrozenSet, Optional

from app_service.di.descriptor import ComponentDescriptor
from app_service.di.errors import LayeringViolation

DOMAIN = "domain"
PORTS = "ports"
APPLICATION = "application"
ADAPTERS = "adapters"

ALLOWED_DEPENDENCIES: Dict[str, FrozenSet[str]] = {
    DOMAIN: frozenset({DOMAIN}),
    PORTS: frozenset({DOMAIN, PORTS}),
    APPLICATION: frozenset({DOMAIN, PORTS, APPLICATION}),
    ADAPTERS: frozenset({DOMAIN, PORTS, APPLICATION, ADAPTERS}),
}


def layer_of(module_path: str) -> Optional[str]:
    """Get the layer a module belongs to, or None if it is outside every layer."""
    for segment in module_path.split("."):
        if segment in ALLOWED_DEPENDENCIES:
            return segment
    return None


class LayerPolicy:
    """Validates constructor dependencies of discovered components."""

    def __init__(self, allowed: Optional[Dict[str, FrozenSet[str]]] = None) -> None:
        self._allowed = allowed or ALLOWED_DEPENDENCIES

    def check(self, descriptor: ComponentDescriptor, parameter: str, dependency: type) -> None:
        """
        Verify one constructor dependency.

        Args:
            descriptor: Component receiving the dependency
            parameter: Constructor parameter name
            dependency: Annotated capability type

        Raises:
            LayeringViolation: If the component's layer may not depend on the dependency's layer
        """
        component_layer = layer_of(descriptor.namespace)
        dependency_layer = layer_of(getattr(dependency, "__module__", "") or "")
        if component_layer is None or dependency_layer is None:
            return
        if dependency_layer not in self._allowed.get(component_layer, frozenset()):
            raise LayeringViolation(
                descriptor.qualified_name, parameter, dependency, component_layer, dependency_layer
            )
