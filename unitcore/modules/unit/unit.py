"""
Unit base class.

A unit bundles an immutable identity (DNA) with its trinity: capabilities,
their schemas and a validator that keeps both consistent.

Units are created only through their create() classmethod. The factory
builds the props; calling the class directly raises TypeError so every
live unit went through the same validated initialization.

Example:
    class MyUnit(Unit):
        @classmethod
        def create(cls, data):
            props = MyUnitProps(dna=create_unit_schema(id="my-unit", version="1.0.0"), data=data)
            return cls._construct(props)

        def capabilities(self): ...
        def schema(self): ...
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from unitcore.errors import InvalidUnitError
from unitcore.modules.capabilities import Capabilities
from unitcore.modules.config import get_config
from unitcore.modules.events import Event, EventEmitter, EventError
from unitcore.modules.schema import Schema, ToolSchema
from unitcore.modules.validator import Validator

from .contract import TeachingContract
from .dna import UnitSchema, create_unit_schema, next_version
from .formatting import format_help

logger = logging.getLogger("unitcore.unit")

_FACTORY_TOKEN = object()


@dataclass(frozen=True, kw_only=True)
class UnitProps:
    """
    Immutable unit state. Concrete units extend this with their own fields.

    strict_mode None means "use the configured default".
    """

    dna: UnitSchema
    created: datetime = field(default_factory=lambda: datetime.now(UTC))
    metadata: Dict[str, Any] = field(default_factory=dict)
    strict_mode: Optional[bool] = None


@dataclass
class UnitCore:
    """The live trinity of a unit."""

    capabilities: Capabilities
    schema: Schema
    validator: Validator


class Unit(ABC):
    """Base implementation for units."""

    def __init__(self, props: UnitProps, *, _token: object = None):
        if _token is not _FACTORY_TOKEN:
            raise TypeError(
                f"{type(self).__name__} cannot be instantiated directly, "
                f"use {type(self).__name__}.create()"
            )
        self._props = props
        self._events = EventEmitter()
        self._core = self.build()

        if not self._core.validator.is_valid():
            raise InvalidUnitError(f"[{self.dna.id}] Invalid unit trinity")

    @classmethod
    def _construct(cls, props: UnitProps) -> "Unit":
        """Instantiate from props. Only factories call this."""
        return cls(props, _token=_FACTORY_TOKEN)

    @classmethod
    @abstractmethod
    def create(cls, *args: Any, **kwargs: Any) -> "Unit":
        """Build props and return a new unit."""

    # Trinity

    def build(self) -> UnitCore:
        """Assemble the live trinity from the unit's fixed tables."""
        capabilities = self.capabilities()
        schema = self.schema()
        validator = Validator.create(
            self.dna.id, capabilities, schema, strict_mode=self.strict_mode
        )
        return UnitCore(capabilities=capabilities, schema=schema, validator=validator)

    @abstractmethod
    def capabilities(self) -> Capabilities:
        """Native capabilities of this unit (fresh registry per call)."""

    @abstractmethod
    def schema(self) -> Schema:
        """Schemas of the native capabilities (fresh registry per call)."""

    def validator(self) -> Validator:
        """Validator over fresh native capabilities and schemas."""
        return Validator.create(
            self.dna.id, self.capabilities(), self.schema(), strict_mode=self.strict_mode
        )

    # Identity

    @property
    def dna(self) -> UnitSchema:
        return self._props.dna

    @property
    def props(self) -> UnitProps:
        return self._props

    @property
    def strict_mode(self) -> bool:
        """Mode the live validator runs in, fixed when the unit was built."""
        core = getattr(self, "_core", None)
        if core is not None:
            return core.validator.strict_mode
        if self._props.strict_mode is not None:
            return self._props.strict_mode
        return bool(get_config().get("strict_mode", False))

    @property
    def events(self) -> EventEmitter:
        return self._events

    def whoami(self) -> str:
        return f"{type(self).__name__}[{self.dna.id}@{self.dna.version}]"

    def help(self) -> str:
        return format_help(self)

    def equals(self, other: object) -> bool:
        """Value equality on props."""
        return type(self) is type(other) and self._props == other._props

    # Live capabilities

    def can(self, name: str) -> bool:
        return self._core.capabilities.has(name)

    def get_capabilities(self) -> List[str]:
        return self._core.capabilities.list()

    def has_schema(self, name: str) -> bool:
        return self._core.schema.has(name)

    def get_schema(self, name: str) -> Optional[ToolSchema]:
        return self._core.schema.get(name)

    async def execute(self, name: str, *args: Any) -> Any:
        """
        Execute a capability through the validator.

        Raises:
            CapabilityNotFoundError: If the unit has no such capability
            ValidationFailedError: In strict mode, on invalid input or output
        """
        try:
            result = await self._core.validator.execute(name, *args)
        except Exception as e:
            logger.debug(f"Capability '{name}' failed: {e}", extra={"unit_id": self.dna.id})
            self._emit("capability.failed", {"unit_id": self.dna.id, "capability": name}, e)
            raise

        self._emit("capability.executed", {"unit_id": self.dna.id, "capability": name})
        return result

    def _emit(self, event_type: str, data: Dict[str, Any], error: Optional[BaseException] = None) -> None:
        if not get_config().get("emit_events", True):
            return
        self._events.emit(
            Event(
                type=event_type,
                data=data,
                error=EventError.from_exception(error) if error is not None else None,
            )
        )

    # Teaching, learning, evolution

    def teach(self) -> TeachingContract:
        """Snapshot of the live trinity for another unit to learn from."""
        return TeachingContract.snapshot(
            self.dna.id,
            self._core.capabilities,
            self._core.schema,
            strict_mode=self._core.validator.strict_mode,
        )

    def learn(self, contracts: Sequence[TeachingContract]) -> None:
        """
        Absorb capabilities and schemas as '<unit-id>.<name>'.

        Raises:
            InvalidUnitError: If a contract is incompatible
            CapabilityExistsError: If a namespaced name is already registered
        """
        self._core.validator.learn(contracts)
        learned = [contract.unit_id for contract in contracts]
        logger.info(f"Learned from {', '.join(learned)}", extra={"unit_id": self.dna.id})
        self._emit("unit.learned", {"unit_id": self.dna.id, "learned": learned})

    def evolve(
        self,
        name: str,
        additional_capabilities: Optional[Dict[str, Callable[..., Any]]] = None,
    ) -> "Unit":
        """
        Create an evolved unit of the same class.

        The new unit gets DNA {id: name, version bumped, parent: this DNA},
        learns this unit's live trinity and registers any additional
        capabilities under its own namespace.
        """
        dna = create_unit_schema(
            id=name,
            version=next_version(self.dna.version),
            description=self.dna.description,
            parent=self.dna,
        )
        props = dataclasses.replace(
            self._props,
            dna=dna,
            created=datetime.now(UTC),
            metadata=dict(self._props.metadata),
        )
        evolved = type(self)._construct(props)
        evolved.learn([self.teach()])

        if additional_capabilities:
            capabilities = Capabilities.create(name, additional_capabilities)
            schema = Schema.create(
                name,
                {
                    cap_name: {
                        "name": cap_name,
                        "description": f"Capability {cap_name} added during evolution",
                        "parameters": {"type": "object", "properties": {}, "required": []},
                    }
                    for cap_name in additional_capabilities
                },
            )
            evolved.learn([TeachingContract.snapshot(name, capabilities, schema)])

        logger.info(f"Evolved into {evolved.whoami()}", extra={"unit_id": self.dna.id})
        return evolved

    def __repr__(self) -> str:
        return self.whoami()
