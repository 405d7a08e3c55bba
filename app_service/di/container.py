"""
Composition Root
================

Single process-wide owner of the component registry and of every component
instance. Built once at bootstrap:

    UNINITIALIZED -> SCANNING -> READY    (all components scanned, validated and wired)
                              -> FAILED   (nothing retained)

Components are instantiated eagerly by constructor injection, so nothing is
written after READY and the root can be read from any thread without locking.
"""
import collections.abc
import inspect
import logging
import types
import typing
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from app_service.di.descriptor import ComponentDescriptor
from app_service.di.errors import (
    AmbiguousCapability,
    CapabilityNotFound,
    ComponentConstructionError,
    CompositionError,
    type_name,
)
from app_service.di.layers import LayerPolicy
from app_service.di.pattern import NamePatternRule
from app_service.di.registry import Registry
from app_service.di.scanner import ComponentScanner, normalize_namespaces

logger = logging.getLogger(__name__)

TypeVarType = TypeVar("TypeVarType")

_COLLECTION_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.Iterable,
    collections.abc.Collection,
)
_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))
_MISSING = object()
PROVIDED = "<provided instance>"


def _capability_of(annotation: Any) -> Any:
    """Map a parameterized port such as Repository[User] to its registered class."""
    origin = typing.get_origin(annotation)
    if isinstance(origin, type) and origin not in _COLLECTION_ORIGINS and origin not in _UNION_ORIGINS:
        return origin
    return annotation


class CompositionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    SCANNING = "scanning"
    READY = "ready"
    FAILED = "failed"


class CompositionRoot:
    """
    Dependency injection container built from a component scan.

    Consumers resolve by capability type (the port), never by concrete class.
    """

    def __init__(
        self,
        namespaces: Union[str, Iterable[str]],
        pattern: Optional[NamePatternRule] = None,
        instances: Optional[Mapping[type, Any]] = None,
        layer_policy: Optional[LayerPolicy] = None,
        scanner: Optional[ComponentScanner] = None,
    ) -> None:
        """
        Args:
            namespaces: Packages to scan for components
            pattern: Name rule for discoverable classes (default: *Case / *Service)
            instances: Pre-built objects bound to a type (settings, clients)
            layer_policy: Layering check applied to constructor dependencies, None to skip
            scanner: Component scanner (default: ComponentScanner)
        """
        self._namespaces: Tuple[str, ...] = normalize_namespaces(namespaces)
        self._pattern = pattern or NamePatternRule.default()
        self._provided: Dict[type, Any] = dict(instances or {})
        self._layer_policy = layer_policy
        self._scanner = scanner or ComponentScanner()

        self._state = CompositionState.UNINITIALIZED
        self._registry: Optional[Registry] = None
        self._instances: Dict[type, Any] = {}

    @property
    def state(self) -> CompositionState:
        return self._state

    @property
    def namespaces(self) -> Tuple[str, ...]:
        return self._namespaces

    @property
    def pattern(self) -> NamePatternRule:
        return self._pattern

    @property
    def registry(self) -> Registry:
        self._require_ready()
        return self._registry

    @property
    def is_ready(self) -> bool:
        return self._state is CompositionState.READY

    def compose(self) -> "CompositionRoot":
        """
        Run the single scan-and-wire pass.

        Returns:
            self, in READY state

        Raises:
            CompositionError: If the root was already composed, or any scan,
                validation or construction step failed (state becomes FAILED)
        """
        if self._state is not CompositionState.UNINITIALIZED:
            raise CompositionError(f"Composition root is {self._state.value}; it can only be composed once")

        self._state = CompositionState.SCANNING
        try:
            registry = self._scanner.scan(self._namespaces, self._pattern)
            self._check_provided(registry)
            instances = _Wiring(registry, self._provided, self._layer_policy).build()
        except CompositionError as e:
            self._state = CompositionState.FAILED
            logger.error(f"Composition failed: {e}")
            raise

        self._registry = registry
        self._instances = instances
        self._state = CompositionState.READY
        logger.info(f"Composition root ready: {len(registry)} components wired")
        return self

    def resolve(self, capability: Type[TypeVarType]) -> TypeVarType:
        """
        Get the unique implementation of a capability type.

        Args:
            capability: Port (or concrete component class) to resolve

        Returns:
            Component instance

        Raises:
            CapabilityNotFound: No implementation registered
            AmbiguousCapability: Several implementations of a multi-binding port
        """
        self._require_ready()
        capability = _capability_of(capability)
        if capability in self._provided:
            return self._provided[capability]
        found = self._registry.implementations_of(capability)
        if not found:
            raise CapabilityNotFound(capability, self._namespaces)
        if len(found) > 1:
            raise AmbiguousCapability(capability, [d.qualified_name for d in found], self._namespaces)
        return self._instances[found[0].component_class]

    def resolve_all(self, capability: Type[TypeVarType]) -> List[TypeVarType]:
        """
        Get every implementation of a capability type, in discovery order.

        Raises:
            CapabilityNotFound: No implementation registered
        """
        self._require_ready()
        capability = _capability_of(capability)
        if capability in self._provided:
            return [self._provided[capability]]
        found = self._registry.implementations_of(capability)
        if not found:
            raise CapabilityNotFound(capability, self._namespaces)
        return [self._instances[descriptor.component_class] for descriptor in found]

    def descriptor_for(self, capability: type) -> ComponentDescriptor:
        """Get the unique descriptor registered for a capability type."""
        self._require_ready()
        found = self._registry.implementations_of(capability)
        if not found:
            raise CapabilityNotFound(capability, self._namespaces)
        if len(found) > 1:
            raise AmbiguousCapability(capability, [d.qualified_name for d in found], self._namespaces)
        return found[0]

    def __contains__(self, capability: object) -> bool:
        return self.is_ready and (capability in self._provided or capability in self._registry)

    def _require_ready(self) -> None:
        if self._state is not CompositionState.READY:
            raise CompositionError(
                f"Composition root is {self._state.value}; components can only be resolved once it is ready"
            )

    def _check_provided(self, registry: Registry) -> None:
        for capability in self._provided:
            found = registry.implementations_of(capability)
            if found:
                raise AmbiguousCapability(
                    capability,
                    [PROVIDED] + [d.qualified_name for d in found],
                    self._namespaces,
                )


class _Wiring:
    """One constructor-injection pass over a validated registry."""

    def __init__(
        self,
        registry: Registry,
        provided: Mapping[type, Any],
        layer_policy: Optional[LayerPolicy],
    ) -> None:
        self._registry = registry
        self._provided = provided
        self._layer_policy = layer_policy
        self._instances: Dict[type, Any] = {}
        self._building: List[ComponentDescriptor] = []

    def build(self) -> Dict[type, Any]:
        for descriptor in self._registry:
            self._instantiate(descriptor)
        return self._instances

    def _instantiate(self, descriptor: ComponentDescriptor) -> Any:
        component_class = descriptor.component_class
        if component_class in self._instances:
            return self._instances[component_class]
        if descriptor in self._building:
            cycle = self._building[self._building.index(descriptor):] + [descriptor]
            raise ComponentConstructionError(
                descriptor.qualified_name,
                "dependency cycle " + " -> ".join(d.name for d in cycle),
            )

        self._building.append(descriptor)
        try:
            kwargs = self._arguments_for(descriptor)
            try:
                instance = component_class(**kwargs)
            except Exception as e:
                raise ComponentConstructionError(descriptor.qualified_name, f"constructor raised {e!r}") from e
        finally:
            self._building.pop()

        self._instances[component_class] = instance
        logger.debug(f"Wired {descriptor.qualified_name} ({descriptor.kind.value})")
        return instance

    def _arguments_for(self, descriptor: ComponentDescriptor) -> Dict[str, Any]:
        component_class = descriptor.component_class
        if component_class.__init__ is object.__init__:
            return {}
        try:
            signature = inspect.signature(component_class)
            hints = typing.get_type_hints(component_class.__init__)
        except (NameError, TypeError, ValueError) as e:
            raise ComponentConstructionError(
                descriptor.qualified_name, f"constructor annotations cannot be evaluated: {e}"
            ) from e

        kwargs: Dict[str, Any] = {}
        for name, parameter in signature.parameters.items():
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            value = self._argument(descriptor, name, hints.get(name), parameter.default)
            if value is not _MISSING:
                kwargs[name] = value
        return kwargs

    def _argument(self, descriptor: ComponentDescriptor, name: str, annotation: Any, default: Any) -> Any:
        has_default = default is not inspect.Parameter.empty
        if annotation is None:
            if has_default:
                return _MISSING
            raise ComponentConstructionError(
                descriptor.qualified_name, f"parameter '{name}' has no type annotation and no default"
            )

        origin = typing.get_origin(annotation)
        arguments = typing.get_args(annotation)

        # Optional[T]: inject when registered, otherwise keep the default (or None)
        if origin in _UNION_ORIGINS and type(None) in arguments:
            inner = [_capability_of(argument) for argument in arguments if argument is not type(None)]
            if len(inner) == 1 and self._is_available(inner[0]):
                return self._single(descriptor, name, inner[0])
            return _MISSING if has_default else None

        if origin in _COLLECTION_ORIGINS and arguments:
            element = _capability_of(arguments[0])
            if self._is_available(element):
                found = self._many(descriptor, name, element)
                return tuple(found) if origin is tuple else found
            if has_default:
                return _MISSING
            raise CapabilityNotFound(
                element,
                self._registry.namespaces,
                message=self._missing_message(descriptor, name, element),
            )

        capability = _capability_of(annotation)
        if isinstance(capability, type) and self._is_available(capability):
            return self._single(descriptor, name, capability)
        if has_default:
            return _MISSING
        raise CapabilityNotFound(
            capability,
            self._registry.namespaces,
            message=self._missing_message(descriptor, name, capability),
        )

    def _is_available(self, capability: Any) -> bool:
        return capability in self._provided or capability in self._registry

    def _single(self, descriptor: ComponentDescriptor, name: str, capability: type) -> Any:
        self._check_layer(descriptor, name, capability)
        if capability in self._provided:
            return self._provided[capability]
        found = self._registry.implementations_of(capability)
        if len(found) > 1:
            raise AmbiguousCapability(
                capability, [d.qualified_name for d in found], self._registry.namespaces
            )
        return self._instantiate(found[0])

    def _many(self, descriptor: ComponentDescriptor, name: str, capability: type) -> List[Any]:
        self._check_layer(descriptor, name, capability)
        if capability in self._provided:
            return [self._provided[capability]]
        return [self._instantiate(found) for found in self._registry.implementations_of(capability)]

    def _check_layer(self, descriptor: ComponentDescriptor, name: str, capability: type) -> None:
        if self._layer_policy is not None:
            self._layer_policy.check(descriptor, name, capability)

    def _missing_message(self, descriptor: ComponentDescriptor, name: str, capability: Any) -> str:
        scope = ", ".join(self._registry.namespaces) or "no namespaces"
        return (
            f"{descriptor.qualified_name} requires {type_name(capability)} through parameter "
            f"'{name}', but no implementation is registered (searched {scope})"
        )


# Global composition root (created once by bootstrap)
_container: Optional[CompositionRoot] = None


def init_container(container: CompositionRoot) -> CompositionRoot:
    """
    Compose and install the process-wide composition root.

    Args:
        container: Root to compose (composed here if still uninitialized)

    Returns:
        The installed root, in READY state

    Raises:
        CompositionError: If a root is already installed or composition fails
    """
    global _container
    if _container is not None:
        raise CompositionError("Composition root already initialized; it is created once per process")
    if container.state is CompositionState.UNINITIALIZED:
        container.compose()
    elif not container.is_ready:
        raise CompositionError(f"Cannot install a composition root in state {container.state.value}")
    _container = container
    return _container


def get_container() -> CompositionRoot:
    """
    Get the process-wide composition root.

    Raises:
        CompositionError: If bootstrap has not initialized it yet
    """
    if _container is None:
        raise CompositionError("Composition root is not initialized; run bootstrap first")
    return _container
