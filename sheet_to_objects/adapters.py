"""
Destination capability set.

The binder never touches destination objects directly.  It goes through a
:class:`DestinationAdapter`, so the same engine can populate plain
objects, dataclasses, dicts, or any host-managed representation that
supplies its own adapter.
"""

from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any, Callable


class DestinationAdapter(ABC):

    @abstractmethod
    def get(self, target: Any, member: str) -> Any:
        """Current value of *member*, or ``None`` when unset."""

    @abstractmethod
    def set(self, target: Any, member: str, value: Any) -> None:
        ...

    def append(self, target: Any, member: str, value: Any) -> None:
        """Append to a sequence member, creating the list if unset."""
        seq = self.get(target, member)
        if seq is None:
            seq = []
            self.set(target, member, seq)
        seq.append(value)

    def create(self, factory: Callable[[], Any]) -> Any:
        return factory()


class AttributeAdapter(DestinationAdapter):
    """Plain objects and dataclasses: members are attributes."""

    def get(self, target, member):
        return getattr(target, member, None)

    def set(self, target, member, value):
        setattr(target, member, value)


class MappingAdapter(DestinationAdapter):
    """Dict-like destinations: members are keys."""

    def get(self, target, member):
        return target.get(member)

    def set(self, target, member, value):
        target[member] = value


def adapter_for(target: Any) -> DestinationAdapter:
    if isinstance(target, MutableMapping):
        return MappingAdapter()
    return AttributeAdapter()
