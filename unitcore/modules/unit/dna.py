"""
Unit DNA: the immutable identity of a unit and its evolution lineage.
"""

import re
from dataclasses import dataclass
from typing import Optional

from unitcore.errors import InvalidUnitError

UNIT_ID_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")


@dataclass(frozen=True)
class UnitSchema:
    """Unit identity. parent is the DNA this unit evolved from."""

    id: str
    version: str
    description: Optional[str] = None
    parent: Optional["UnitSchema"] = None

    def lineage(self) -> list:
        """IDs from this unit back to its oldest ancestor."""
        ids = []
        current: Optional[UnitSchema] = self
        while current is not None:
            ids.append(f"{current.id}@{current.version}")
            current = current.parent
        return ids


def validate_unit_id(unit_id: str) -> None:
    """
    Raises:
        InvalidUnitError: If the ID is empty, not lowercase, contains dots or
            other characters than letters, digits and hyphens
    """
    if not isinstance(unit_id, str) or not unit_id.strip():
        raise InvalidUnitError("Unit ID cannot be empty")
    if unit_id != unit_id.lower():
        raise InvalidUnitError(f"Unit ID must be lowercase: {unit_id!r}")
    if "." in unit_id:
        # Dots separate namespace and name in learned capabilities
        raise InvalidUnitError(f"Unit ID cannot contain dots: {unit_id!r}")
    if not UNIT_ID_PATTERN.match(unit_id):
        raise InvalidUnitError(
            f"Unit ID must be alphanumeric + hyphens, starting with a letter: {unit_id!r}"
        )


def create_unit_schema(
    id: str,
    version: str,
    description: Optional[str] = None,
    parent: Optional[UnitSchema] = None,
) -> UnitSchema:
    """Build validated unit DNA."""
    validate_unit_id(id)
    if not isinstance(version, str) or not version.strip():
        raise InvalidUnitError(f"[{id}] Unit version cannot be empty")
    return UnitSchema(id=id, version=version, description=description, parent=parent)


def validate_unit_schema(schema: object) -> bool:
    """Check that a value is well-formed unit DNA, including its ancestors."""
    if not isinstance(schema, UnitSchema):
        return False
    if not isinstance(schema.id, str) or not schema.id.strip() or " " in schema.id:
        return False
    if not isinstance(schema.version, str) or not schema.version.strip():
        return False
    return schema.parent is None or validate_unit_schema(schema.parent)


def next_version(version: str) -> str:
    """Bump the patch part of a version ("1.0.0" -> "1.0.1", "2" -> "2.1")."""
    parts = version.split(".")
    if len(parts) >= 3 and parts[2].isdigit():
        parts[2] = str(int(parts[2]) + 1)
        return ".".join(parts)
    return f"{version}.1"
