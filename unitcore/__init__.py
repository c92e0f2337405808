"""
Unitcore - Self-describing Units

A unit is an object that carries its own identity, a set of named
capabilities, a machine-readable schema for them and a validator keeping
both in step. Units can teach their capabilities to other units and evolve
into new units.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- capabilities: Named, tagged callables
- schema: Tool schema descriptors (the wire contract)
- validator: Trinity consistency and argument checks
- unit: Base class, DNA, teaching contract
- events: Wildcard event emitter
- config: Runtime configuration
"""

__version__ = "1.0.0"

from unitcore.errors import (
    CapabilityExistsError,
    CapabilityNotFoundError,
    InvalidUnitError,
    SchemaError,
    UnitError,
    ValidationFailedError,
)
from unitcore.modules.capabilities import Capabilities, Capability, CapabilityKind
from unitcore.modules.events import Event, EventEmitter, EventError
from unitcore.modules.schema import Schema, ToolSchema
from unitcore.modules.unit import (
    TeachingContract,
    Unit,
    UnitLike,
    UnitProps,
    UnitSchema,
    create_unit_schema,
    format_help,
    validate_unit_schema,
)
from unitcore.modules.validator import ValidationIssue, Validator
from unitcore.units import SimpleUnit, create_simple_unit

__all__ = [
    "Capabilities",
    "Capability",
    "CapabilityKind",
    "Schema",
    "ToolSchema",
    "Validator",
    "ValidationIssue",
    "Unit",
    "UnitLike",
    "UnitProps",
    "UnitSchema",
    "TeachingContract",
    "create_unit_schema",
    "validate_unit_schema",
    "format_help",
    "Event",
    "EventEmitter",
    "EventError",
    "SimpleUnit",
    "create_simple_unit",
    "UnitError",
    "CapabilityNotFoundError",
    "CapabilityExistsError",
    "SchemaError",
    "InvalidUnitError",
    "ValidationFailedError",
]
