"""
Validator for the unit trinity.

Keeps capabilities and schemas consistent and checks capability arguments
and results against their descriptors. In strict mode the first issue
raises ValidationFailedError; otherwise issues are only logged.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Tuple

from unitcore.errors import CapabilityNotFoundError, InvalidUnitError, ValidationFailedError
from unitcore.modules.capabilities import Capabilities
from unitcore.modules.schema import ParametersSchema, ResponseSchema, Schema

if TYPE_CHECKING:
    from unitcore.modules.unit.contract import TeachingContract

logger = logging.getLogger("unitcore.validator")


@dataclass(frozen=True)
class ValidationIssue:
    """One violated constraint. field is "$" when the whole value is wrong."""

    field: str
    constraint: str
    message: str


def check_type(value: Any, expected: str) -> bool:
    """Check a value against a schema type name. Unknown type names pass."""
    if expected == "string":
        return isinstance(value, str)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "object":
        return isinstance(value, Mapping)
    if expected == "array":
        return isinstance(value, (list, tuple))
    return True


class Validator:
    """
    Validator of a unit's capabilities and schemas.

    Part of the unit trinity (capabilities + schema + validator).
    """

    def __init__(
        self,
        unit_id: str,
        capabilities: Capabilities,
        schema: Schema,
        strict_mode: bool = False,
    ):
        """
        Initialize validator.

        Args:
            unit_id: Owning unit ID
            capabilities: Capabilities registry to validate (held by reference)
            schema: Schema registry to validate (held by reference)
            strict_mode: Raise on invalid input/output instead of logging
        """
        self.unit_id = unit_id
        self.capabilities = capabilities
        self.schema = schema
        self.strict_mode = strict_mode

    @classmethod
    def create(
        cls,
        unit_id: str,
        capabilities: Capabilities,
        schema: Schema,
        strict_mode: bool = False,
    ) -> "Validator":
        """
        Create a validator, refusing an inconsistent trinity.

        Raises:
            InvalidUnitError: If capability and schema names differ
        """
        validator = cls(unit_id, capabilities, schema, strict_mode=strict_mode)
        validator.ensure_valid()
        return validator

    def mismatches(self) -> Tuple[List[str], List[str]]:
        """Return (capabilities without schema, schemas without capability)."""
        capability_names = set(self.capabilities.list())
        schema_names = set(self.schema.list())
        return (
            sorted(capability_names - schema_names),
            sorted(schema_names - capability_names),
        )

    def is_valid(self) -> bool:
        """Every capability has a schema and every schema has a capability."""
        missing_schemas, orphan_schemas = self.mismatches()
        return not missing_schemas and not orphan_schemas

    def ensure_valid(self) -> None:
        """
        Raises:
            InvalidUnitError: If the trinity is inconsistent
        """
        missing_schemas, orphan_schemas = self.mismatches()
        if missing_schemas or orphan_schemas:
            raise InvalidUnitError(
                f"[{self.unit_id}] Capabilities and schemas are incompatible "
                f"(missing schemas: {missing_schemas or 'none'}, "
                f"schemas without capability: {orphan_schemas or 'none'})"
            )

    def validate_compatibility(
        self, contract: "TeachingContract"
    ) -> Tuple[bool, Optional[str]]:
        """
        Check that a teaching contract can be learned.

        Returns:
            Tuple of (is_compatible, reason or None)
        """
        if contract.capabilities is None or contract.schema is None:
            return False, "Missing required trinity components"

        capabilities = contract.capabilities.list()
        schemas = contract.schema.list()
        for name in capabilities:
            if name not in schemas:
                return False, f"Capability '{name}' missing corresponding schema"
        for name in schemas:
            if name not in capabilities:
                return False, f"Schema '{name}' has no corresponding capability"

        return True, None

    def validate_input(self, value: Any, parameters: ParametersSchema) -> List[ValidationIssue]:
        """Check capability arguments against a parameters descriptor."""
        if not isinstance(value, Mapping):
            return [ValidationIssue("$", "type", f"expected object, got {type(value).__name__}")]

        issues = []
        for name in parameters.required or []:
            if name not in value:
                issues.append(ValidationIssue(name, "required", f"missing required field '{name}'"))

        for name, prop in parameters.properties.items():
            if name not in value:
                continue
            field_value = value[name]
            if not check_type(field_value, prop.type):
                issues.append(
                    ValidationIssue(
                        name,
                        "type",
                        f"field '{name}' expected {prop.type}, got {type(field_value).__name__}",
                    )
                )
            elif prop.enum is not None and field_value not in prop.enum:
                issues.append(
                    ValidationIssue(
                        name, "enum", f"field '{name}' must be one of {', '.join(prop.enum)}"
                    )
                )
        return issues

    def validate_output(self, value: Any, response: ResponseSchema) -> List[ValidationIssue]:
        """Check a capability result against a response descriptor."""
        if not check_type(value, response.type):
            return [
                ValidationIssue(
                    "$", "type", f"expected {response.type}, got {type(value).__name__}"
                )
            ]
        if response.type != "object":
            return []

        issues = []
        for name in response.required or []:
            if name not in value:
                issues.append(ValidationIssue(name, "required", f"missing required field '{name}'"))
        for name, prop in (response.properties or {}).items():
            if name in value and not check_type(value[name], prop.type):
                issues.append(
                    ValidationIssue(name, "type", f"field '{name}' expected {prop.type}")
                )
        return issues

    def _report(self, name: str, issues: List[ValidationIssue], stage: str) -> None:
        if not issues:
            return
        if self.strict_mode:
            first = issues[0]
            raise ValidationFailedError(
                name, first.field, first.constraint, f"{stage} {first.message}", issues
            )
        for issue in issues:
            logger.warning(
                f"Capability '{name}' {stage} {issue.message}",
                extra={"unit_id": self.unit_id},
            )

    def check_input(self, name: str, args: Tuple[Any, ...]) -> None:
        """Validate the first positional argument of a call to a capability."""
        schema = self.schema.get(name)
        if schema is None:
            return
        value = args[0] if args else {}
        self._report(name, self.validate_input(value, schema.parameters), "input:")

    def check_output(self, name: str, result: Any) -> None:
        schema = self.schema.get(name)
        if schema is None or schema.response is None:
            return
        self._report(name, self.validate_output(result, schema.response), "output:")

    async def execute(self, name: str, *args: Any) -> Any:
        """
        Execute a capability with input and output validation.

        Raises:
            CapabilityNotFoundError: If the capability does not exist
            ValidationFailedError: In strict mode, on invalid input or output
        """
        if not self.capabilities.has(name):
            raise CapabilityNotFoundError(self.unit_id, name, self.capabilities.list())

        self.check_input(name, args)
        result = await self.capabilities.execute(name, *args)
        self.check_output(name, result)
        return result

    def learn(self, contracts: Iterable["TeachingContract"]) -> None:
        """
        Learn capabilities and schemas from contracts.

        All or nothing: the import is first run against copies of both
        registries, and the live registries change only if it succeeds.

        Raises:
            InvalidUnitError: If a contract is incompatible or the result is inconsistent
            CapabilityExistsError: If a namespaced capability is already registered
            SchemaError: If a namespaced schema is already registered
        """
        contracts = list(contracts)
        for contract in contracts:
            compatible, reason = self.validate_compatibility(contract)
            if not compatible:
                raise InvalidUnitError(
                    f"[{self.unit_id}] Cannot learn from '{contract.unit_id}': {reason}"
                )

        staged = Validator(
            self.unit_id, self.capabilities.copy(), self.schema.copy(), self.strict_mode
        )
        staged.capabilities.learn(contracts)
        staged.schema.learn(contracts)
        staged.ensure_valid()

        self.capabilities.learn(contracts)
        self.schema.learn(contracts)

    def describe(self) -> str:
        """Human-readable validator status."""
        return "\n".join(
            [
                "Validator:",
                f"  Capabilities: {', '.join(self.capabilities.list()) or 'none'}",
                f"  Schemas: {', '.join(self.schema.list()) or 'none'}",
                f"  Strict mode: {self.strict_mode}",
                f"  Status: {'Valid' if self.is_valid() else 'Invalid'}",
            ]
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Validator):
            return NotImplemented
        return (
            self.unit_id == other.unit_id
            and self.strict_mode == other.strict_mode
            and self.capabilities == other.capabilities
            and self.schema == other.schema
        )

    def __repr__(self) -> str:
        return f"Validator({self.unit_id!r}, strict_mode={self.strict_mode})"
