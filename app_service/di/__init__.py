"""
Dependency Injection Package
============================

Component discovery and wiring: scan namespaces, classify classes by name,
register them by the capability types (ports) they implement, resolve by port.
"""
from .container import CompositionRoot, CompositionState, get_container, init_container
from .descriptor import ComponentDescriptor, ComponentKind
from .errors import (
    AmbiguousCapability,
    CapabilityNotFound,
    ComponentConstructionError,
    CompositionError,
    LayeringViolation,
    ScanConfigurationError,
    UnresolvedCapability,
)
from .layers import LayerPolicy
from .markers import allow_multiple, implements
from .pattern import DEFAULT_PATTERN, NamePatternRule
from .registry import Registry
from .scanner import ComponentScanner, scan

__all__ = [
    "CompositionRoot",
    "CompositionState",
    "get_container",
    "init_container",
    "ComponentDescriptor",
    "ComponentKind",
    "AmbiguousCapability",
    "CapabilityNotFound",
    "ComponentConstructionError",
    "CompositionError",
    "LayeringViolation",
    "ScanConfigurationError",
    "UnresolvedCapability",
    "LayerPolicy",
    "allow_multiple",
    "implements",
    "DEFAULT_PATTERN",
    "NamePatternRule",
    "Registry",
    "ComponentScanner",
    "scan",
]
