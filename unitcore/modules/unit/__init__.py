"""
Unit Module - Black Box Interface

Purpose: Base class and contracts shared by every unit
Interface: Unit, UnitProps, UnitSchema (DNA), TeachingContract, UnitLike,
           create_unit_schema(), validate_unit_schema(), format_help()
Hidden: Factory-only construction, trinity assembly, evolution lineage
"""

from .contract import TeachingContract
from .dna import (
    UnitSchema,
    create_unit_schema,
    next_version,
    validate_unit_id,
    validate_unit_schema,
)
from .formatting import format_help
from .interfaces import UnitLike
from .unit import Unit, UnitCore, UnitProps

__all__ = [
    "Unit",
    "UnitCore",
    "UnitProps",
    "UnitLike",
    "UnitSchema",
    "TeachingContract",
    "create_unit_schema",
    "validate_unit_id",
    "validate_unit_schema",
    "next_version",
    "format_help",
]
