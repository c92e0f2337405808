"""
Unitcore exceptions.

Every failure a unit reports is a UnitError subclass. The concrete classes
also derive from the built-in exception that best describes them, so
callers can catch LookupError/ValueError without importing this module.
"""

from typing import List, Optional, Sequence


class UnitError(Exception):
    """Base class for all unitcore errors."""


class CapabilityNotFoundError(UnitError, LookupError):
    """Raised when a capability name is not registered on a unit."""

    def __init__(self, unit_id: str, name: str, available: Sequence[str] = ()):
        self.unit_id = unit_id
        self.name = name
        self.available = list(available)
        super().__init__(
            f"[{unit_id}] Capability '{name}' not found. "
            f"Available: {', '.join(self.available) or 'none'}"
        )


class CapabilityExistsError(UnitError, ValueError):
    """Raised when a capability name is registered twice."""

    def __init__(self, unit_id: str, name: str):
        self.unit_id = unit_id
        self.name = name
        super().__init__(f"[{unit_id}] Capability '{name}' already exists")


class SchemaError(UnitError, ValueError):
    """Raised for a malformed tool schema."""


class InvalidUnitError(UnitError, ValueError):
    """Raised when a unit's identity or trinity is inconsistent."""


class ValidationFailedError(UnitError, ValueError):
    """
    Raised by a strict validator when arguments or results do not match
    the capability schema.

    Attributes:
        capability: Capability name
        field: Offending field ("$" for the value itself)
        constraint: Violated constraint (required, type, enum)
        issues: Every issue found, first one is reported in the message
    """

    def __init__(
        self,
        capability: str,
        field: str,
        constraint: str,
        message: Optional[str] = None,
        issues: Optional[List] = None,
    ):
        self.capability = capability
        self.field = field
        self.constraint = constraint
        self.issues = list(issues or [])
        detail = message or f"field '{field}' violates '{constraint}'"
        super().__init__(f"Validation failed for '{capability}': {detail}")
