"""Unit interfaces following Black Box Design principles."""
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from unitcore.modules.capabilities import Capabilities
from unitcore.modules.schema import Schema, ToolSchema
from unitcore.modules.validator import Validator

from .contract import TeachingContract
from .dna import UnitSchema


@runtime_checkable
class UnitLike(Protocol):
    """Protocol every unit satisfies - allows units from any implementation."""

    @property
    def dna(self) -> UnitSchema:
        ...

    def whoami(self) -> str:
        """Unit identity as a one-line string."""
        ...

    def can(self, name: str) -> bool:
        ...

    def get_capabilities(self) -> List[str]:
        """Names of all live capabilities, learned ones included."""
        ...

    def capabilities(self) -> Capabilities:
        ...

    def schema(self) -> Schema:
        ...

    def validator(self) -> Validator:
        ...

    def help(self) -> str:
        """Human-readable description, never raises."""
        ...

    async def execute(self, name: str, *args: Any) -> Any:
        ...

    def teach(self) -> TeachingContract:
        ...

    def learn(self, contracts: Sequence[TeachingContract]) -> None:
        ...

    def evolve(
        self,
        name: str,
        additional_capabilities: Optional[Dict[str, Callable[..., Any]]] = None,
    ) -> "UnitLike":
        ...

    def has_schema(self, name: str) -> bool:
        ...

    def get_schema(self, name: str) -> Optional[ToolSchema]:
        ...
