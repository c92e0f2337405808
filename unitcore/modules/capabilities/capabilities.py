"""
Capabilities registry for units.

A capability is a named callable a unit exposes. Each callable is tagged on
registration as sync or async so execution never has to guess at call time.

Design Principles:
- Fail at registration: bad names, non-callables and duplicates are rejected in add()
- Failures inside a capability propagate unchanged to the caller
- Learned capabilities live under "<unit-id>.<name>"
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Iterator, List, Optional

from unitcore.errors import CapabilityExistsError, CapabilityNotFoundError

if TYPE_CHECKING:
    from unitcore.modules.unit.contract import TeachingContract

logger = logging.getLogger("unitcore.capabilities")


class CapabilityKind(str, Enum):
    """How a capability is invoked."""

    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class Capability:
    """A registered capability: name plus tagged callable."""

    name: str
    fn: Callable[..., Any]
    kind: CapabilityKind

    @classmethod
    def from_callable(cls, name: str, fn: Callable[..., Any]) -> "Capability":
        """Tag a callable by inspecting it."""
        kind = (
            CapabilityKind.ASYNC
            if inspect.iscoroutinefunction(fn)
            else CapabilityKind.SYNC
        )
        return cls(name=name, fn=fn, kind=kind)

    async def invoke(self, *args: Any, **kwargs: Any) -> Any:
        if self.kind is CapabilityKind.ASYNC:
            return await self.fn(*args, **kwargs)
        result = self.fn(*args, **kwargs)
        # Sync callables may still hand back an awaitable (e.g. lambdas over coroutines)
        if inspect.isawaitable(result):
            return await result
        return result


class Capabilities:
    """
    Registry of a unit's capabilities.

    Part of the unit trinity (capabilities + schema + validator).
    """

    def __init__(self, unit_id: str):
        """
        Initialize an empty registry.

        Args:
            unit_id: Owning unit ID, used in error messages
        """
        self.unit_id = unit_id
        self._map: Dict[str, Capability] = {}

    @classmethod
    def create(
        cls, unit_id: str, capabilities: Dict[str, Callable[..., Any]]
    ) -> "Capabilities":
        """Create a registry populated from a name -> callable mapping."""
        instance = cls(unit_id)
        for name, fn in capabilities.items():
            instance.add(name, fn)
        return instance

    def add(self, name: str, fn: Callable[..., Any]) -> Capability:
        """
        Register a capability.

        Raises:
            ValueError: If the name is empty or fn is not callable
            CapabilityExistsError: If the name is already registered
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"[{self.unit_id}] Capability name must be a non-empty string")
        if not callable(fn):
            raise ValueError(f"[{self.unit_id}] Capability '{name}' is not callable")
        if name in self._map:
            raise CapabilityExistsError(self.unit_id, name)

        capability = Capability.from_callable(name, fn)
        self._map[name] = capability
        return capability

    def has(self, name: str) -> bool:
        return name in self._map

    def get(self, name: str) -> Optional[Capability]:
        return self._map.get(name)

    def list(self) -> List[str]:
        """List all capability names in registration order."""
        return list(self._map.keys())

    async def execute(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Execute a capability by name.

        Raises:
            CapabilityNotFoundError: If no capability has this name
        """
        capability = self._map.get(name)
        if capability is None:
            raise CapabilityNotFoundError(self.unit_id, name, self.list())

        logger.debug(
            f"Executing {capability.kind.value} capability '{name}'",
            extra={"unit_id": self.unit_id},
        )
        return await capability.invoke(*args, **kwargs)

    def to_record(self) -> Dict[str, Callable[..., Any]]:
        """Export as a plain name -> callable dictionary."""
        return {name: capability.fn for name, capability in self._map.items()}

    def learn(self, contracts: Iterable["TeachingContract"]) -> None:
        """Import every capability of each contract under '<unit-id>.<name>'."""
        for contract in contracts:
            for name, fn in contract.capabilities.to_record().items():
                self.add(f"{contract.unit_id}.{name}", fn)
            logger.debug(
                f"Learned {len(contract.capabilities)} capabilities from {contract.unit_id}",
                extra={"unit_id": self.unit_id},
            )

    def remove(self, name: str) -> bool:
        return self._map.pop(name, None) is not None

    def clear(self) -> None:
        self._map.clear()

    def copy(self) -> "Capabilities":
        """Independent registry sharing the same callables."""
        clone = Capabilities(self.unit_id)
        clone._map = dict(self._map)
        return clone

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, name: object) -> bool:
        return name in self._map

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._map))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Capabilities):
            return NotImplemented
        return self.unit_id == other.unit_id and self._map == other._map

    def __repr__(self) -> str:
        return f"Capabilities({self.unit_id!r}, {self.list()!r})"
