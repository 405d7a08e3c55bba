"""
Composition Errors
==================

Exceptions raised while scanning, validating and wiring components.

Every error here is a wiring-correctness problem, not a runtime condition:
none of them are retried, they abort startup and are reported to the operator.
"""
from typing import Iterable, Optional, Sequence, Tuple


def type_name(capability: object) -> str:
    """Readable, fully-qualified name for a capability type."""
    module = getattr(capability, "__module__", None)
    qualname = getattr(capability, "__qualname__", None)
    if module and qualname:
        return f"{module}.{qualname}"
    return repr(capability)


class CompositionError(Exception):
    """Base class for every component discovery and wiring failure."""


class ScanConfigurationError(CompositionError):
    """Empty namespace set, unimportable namespace or malformed name pattern."""


class UnresolvedCapability(CompositionError):
    """
    A capability type could not be resolved to exactly one implementation.

    Use the NotFound / Ambiguous sub-kinds to tell the two cases apart.
    """

    kind = "unresolved"

    def __init__(
        self,
        capability: object,
        namespaces: Iterable[str] = (),
        message: Optional[str] = None,
    ) -> None:
        self.capability = capability
        self.namespaces: Tuple[str, ...] = tuple(sorted(namespaces))
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        return f"Capability {type_name(self.capability)} is unresolved"

    def _scope(self) -> str:
        if not self.namespaces:
            return "no scanned namespaces"
        return "namespaces " + ", ".join(self.namespaces)


class CapabilityNotFound(UnresolvedCapability):
    """No component implements the requested capability type."""

    kind = "not_found"

    def _default_message(self) -> str:
        return (
            f"No implementation registered for {type_name(self.capability)} "
            f"(searched {self._scope()})"
        )


class AmbiguousCapability(UnresolvedCapability):
    """More than one component implements a capability expected to be singular."""

    kind = "ambiguous"

    def __init__(
        self,
        capability: object,
        candidates: Sequence[str],
        namespaces: Iterable[str] = (),
    ) -> None:
        self.candidates: Tuple[str, ...] = tuple(candidates)
        super().__init__(capability, namespaces)

    def _default_message(self) -> str:
        return (
            f"Capability {type_name(self.capability)} has "
            f"{len(self.candidates)} implementations in {self._scope()}: "
            + ", ".join(self.candidates)
        )


UnresolvedCapability.NotFound = CapabilityNotFound
UnresolvedCapability.Ambiguous = AmbiguousCapability


class ComponentConstructionError(CompositionError):
    """A discovered component could not be instantiated."""

    def __init__(self, component: str, reason: str) -> None:
        self.component = component
        self.reason = reason
        super().__init__(f"Cannot construct {component}: {reason}")


class LayeringViolation(CompositionError):
    """A component depends on a layer its own layer may not reach."""

    def __init__(
        self,
        component: str,
        parameter: str,
        dependency: object,
        layer: str,
        dependency_layer: str,
    ) -> None:
        self.component = component
        self.parameter = parameter
        self.dependency = dependency
        self.layer = layer
        self.dependency_layer = dependency_layer
        super().__init__(
            f"{component} ({layer} layer) must not depend on {dependency_layer} type "
            f"{type_name(dependency)} (parameter '{parameter}')"
        )
