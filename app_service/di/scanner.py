"""
Component Scanner
=================

Discovers component classes under a set of namespaces (Python packages),
classifies them by simple name and records the capability types they declare.

Scan order is the lexicographic order of fully-qualified class names, so the
resulting registry iterates identically across runs.
"""
import importlib
import inspect
import logging
import pkgutil
from abc import ABC
from types import ModuleType
from typing import Dict, Iterable, List, Optional, Tuple, Union

from app_service.di.descriptor import ComponentDescriptor
from app_service.di.errors import AmbiguousCapability, ScanConfigurationError
from app_service.di.markers import declared_capabilities, is_multiple
from app_service.di.pattern import NamePatternRule
from app_service.di.registry import Registry

logger = logging.getLogger(__name__)

_IGNORED_BASES = (object, ABC)
_IGNORED_MODULES = {"abc", "typing", "typing_extensions", "collections.abc", "_collections_abc"}


def is_port(candidate: type) -> bool:
    """
    Check if a class is a capability contract rather than an implementation.

    Abstract classes and typing.Protocol classes are ports; they are never
    discovered as components.
    """
    if candidate in _IGNORED_BASES or getattr(candidate, "__module__", "") in _IGNORED_MODULES:
        return False
    if getattr(candidate, "_is_protocol", False):
        return True
    return inspect.isabstract(candidate)


def is_capability(candidate: type) -> bool:
    """Ports, plus classes declaring ABC directly (ports without abstract methods)."""
    if is_port(candidate):
        return True
    if candidate in _IGNORED_BASES or getattr(candidate, "__module__", "") in _IGNORED_MODULES:
        return False
    return ABC in candidate.__bases__


def normalize_namespaces(namespaces: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """Strip, de-duplicate and sort namespace names."""
    if isinstance(namespaces, str):
        namespaces = [namespaces]
    cleaned = sorted({namespace.strip() for namespace in namespaces if namespace and namespace.strip()})
    if not cleaned:
        raise ScanConfigurationError("At least one namespace must be declared for scanning")
    return tuple(cleaned)


class ComponentScanner:
    """
    Reflective component discovery.

    Scanning is read-only: it imports modules and inspects their classes,
    and never retains anything unless the whole pass validates.
    """

    def scan(
        self,
        namespaces: Union[str, Iterable[str]],
        pattern: Optional[NamePatternRule] = None,
    ) -> Registry:
        """
        Discover and validate components.

        Args:
            namespaces: Packages or modules to scan
            pattern: Name rule deciding which classes participate (default: *Case / *Service)

        Returns:
            Registry of discovered components

        Raises:
            ScanConfigurationError: Empty namespaces or a namespace/module that fails to import
            AmbiguousCapability: Two components claim the same singular capability
        """
        scanned = normalize_namespaces(namespaces)
        rule = pattern or NamePatternRule.default()
        logger.info(f"Scanning namespaces {', '.join(scanned)} with pattern {rule.pattern!r}")

        candidates: Dict[str, type] = {}
        for namespace in scanned:
            found = 0
            for module in self._iter_modules(namespace):
                for qualified_name, component_class in self._classes_defined_in(module):
                    if qualified_name not in candidates:
                        candidates[qualified_name] = component_class
                        found += 1
            logger.debug(f"Namespace '{namespace}': {found} candidate classes")

        descriptors: List[ComponentDescriptor] = []
        for qualified_name in sorted(candidates):
            component_class = candidates[qualified_name]
            if not rule.matches(component_class.__name__):
                logger.debug(f"Excluded {qualified_name}: name does not match {rule.pattern!r}")
                continue
            descriptors.append(self._describe(component_class, rule))

        self._check_uniqueness(descriptors, scanned)

        registry = Registry(descriptors, scanned)
        logger.info(f"Discovered {len(registry)} components providing {len(registry.capabilities)} capabilities")
        return registry

    def _iter_modules(self, namespace: str) -> List[ModuleType]:
        """Import a namespace and every module below it, sorted by name."""
        try:
            root = importlib.import_module(namespace)
        except Exception as e:
            raise ScanConfigurationError(f"Namespace '{namespace}' cannot be imported: {e}") from e

        modules = [root]
        search_path = getattr(root, "__path__", None)
        if search_path is None:
            return modules

        def on_error(module_name: str) -> None:
            raise ScanConfigurationError(
                f"Package '{module_name}' under namespace '{namespace}' failed to import"
            )

        try:
            module_names = sorted(
                info.name
                for info in pkgutil.walk_packages(search_path, prefix=f"{root.__name__}.", onerror=on_error)
            )
        except ScanConfigurationError:
            raise
        except Exception as e:
            raise ScanConfigurationError(f"Namespace '{namespace}' cannot be walked: {e}") from e

        for module_name in module_names:
            try:
                modules.append(importlib.import_module(module_name))
            except Exception as e:
                raise ScanConfigurationError(
                    f"Module '{module_name}' under namespace '{namespace}' failed to import: {e}"
                ) from e
        return modules

    @staticmethod
    def _classes_defined_in(module: ModuleType) -> List[Tuple[str, type]]:
        """Public, concrete, top-level classes defined by the module itself."""
        found = []
        for name, member in inspect.getmembers(module, inspect.isclass):
            if member.__module__ != module.__name__ or member.__qualname__ != name:
                continue
            if name.startswith("_"):
                continue
            if is_port(member):
                logger.debug(f"Excluded {module.__name__}.{name}: abstract class or Protocol (port)")
                continue
            found.append((f"{module.__name__}.{name}", member))
        return found

    @staticmethod
    def _capabilities_of(component_class: type) -> Tuple[type, ...]:
        capabilities: List[type] = []
        for base in component_class.__mro__[1:]:
            if is_capability(base) and base not in capabilities:
                capabilities.append(base)
        for declared in declared_capabilities(component_class):
            if declared not in capabilities:
                capabilities.append(declared)
        capabilities.append(component_class)
        return tuple(capabilities)

    def _describe(self, component_class: type, rule: NamePatternRule) -> ComponentDescriptor:
        return ComponentDescriptor(
            namespace=component_class.__module__,
            name=component_class.__name__,
            component_class=component_class,
            capabilities=self._capabilities_of(component_class),
            kind=rule.classify(component_class.__name__),
        )

    @staticmethod
    def _check_uniqueness(descriptors: List[ComponentDescriptor], namespaces: Tuple[str, ...]) -> None:
        claims: Dict[type, List[ComponentDescriptor]] = {}
        for descriptor in descriptors:
            for capability in descriptor.capabilities:
                claims.setdefault(capability, []).append(descriptor)

        for capability, claimants in claims.items():
            if len(claimants) > 1 and not is_multiple(capability):
                raise AmbiguousCapability(
                    capability,
                    [claimant.qualified_name for claimant in claimants],
                    namespaces,
                )


def scan(
    namespaces: Union[str, Iterable[str]],
    pattern: Optional[NamePatternRule] = None,
) -> Registry:
    """Shortcut for ComponentScanner().scan()."""
    return ComponentScanner().scan(namespaces, pattern)
