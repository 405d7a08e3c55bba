"""
Component Registry
==================

Immutable mapping from capability type to the components that implement it.
"""
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

from app_service.di.descriptor import ComponentDescriptor


class Registry:
    """
    Capability type -> descriptors, in discovery order.

    Built once by the scanner and never written afterwards, so it can be
    read from any number of threads without locking.
    """

    def __init__(
        self,
        descriptors: Sequence[ComponentDescriptor],
        namespaces: Sequence[str] = (),
    ) -> None:
        by_capability: Dict[type, List[ComponentDescriptor]] = {}
        for descriptor in descriptors:
            for capability in descriptor.capabilities:
                by_capability.setdefault(capability, []).append(descriptor)

        self._descriptors: Tuple[ComponentDescriptor, ...] = tuple(descriptors)
        self._namespaces: Tuple[str, ...] = tuple(namespaces)
        self._by_capability: Mapping[type, Tuple[ComponentDescriptor, ...]] = MappingProxyType(
            {capability: tuple(found) for capability, found in by_capability.items()}
        )

    @property
    def descriptors(self) -> Tuple[ComponentDescriptor, ...]:
        return self._descriptors

    @property
    def namespaces(self) -> Tuple[str, ...]:
        return self._namespaces

    @property
    def capabilities(self) -> Tuple[type, ...]:
        return tuple(self._by_capability)

    def implementations_of(self, capability: object) -> Tuple[ComponentDescriptor, ...]:
        """
        Get every descriptor satisfying a capability type.

        Returns:
            Tuple of descriptors (empty if none registered)
        """
        return self._by_capability.get(capability, ())

    def as_mapping(self) -> Mapping[type, Tuple[ComponentDescriptor, ...]]:
        return self._by_capability

    def __contains__(self, capability: object) -> bool:
        return capability in self._by_capability

    def __iter__(self) -> Iterator[ComponentDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"Registry({len(self._descriptors)} components, {len(self._by_capability)} capabilities)"
