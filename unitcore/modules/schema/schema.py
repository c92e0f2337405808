"""Schema registry: capability name -> ToolSchema."""

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from unitcore.errors import SchemaError

from .models import ToolSchema

if TYPE_CHECKING:
    from unitcore.modules.unit.contract import TeachingContract

logger = logging.getLogger("unitcore.schema")

SchemaInput = Union[ToolSchema, Mapping[str, Any]]


class Schema:
    """
    Registry of a unit's tool schemas.

    Part of the unit trinity (capabilities + schema + validator).
    """

    def __init__(self, unit_id: str):
        self.unit_id = unit_id
        self._schemas: Dict[str, ToolSchema] = {}

    @classmethod
    def create(cls, unit_id: str, schemas: Mapping[str, SchemaInput]) -> "Schema":
        """
        Create a registry from a name -> descriptor mapping.

        Descriptors may be ToolSchema instances or plain dicts.

        Raises:
            SchemaError: If a descriptor is malformed or its name differs from its key
        """
        instance = cls(unit_id)
        for name, schema in schemas.items():
            tool = instance._parse(name, schema)
            if tool.name != name:
                raise SchemaError(
                    f"[{unit_id}] Schema name '{tool.name}' must match key '{name}'"
                )
            instance._schemas[name] = tool
        return instance

    def _parse(self, name: str, schema: SchemaInput) -> ToolSchema:
        if isinstance(schema, ToolSchema):
            return schema
        try:
            return ToolSchema.model_validate(dict(schema))
        except (TypeError, ValueError, ValidationError) as e:
            raise SchemaError(f"[{self.unit_id}] Schema '{name}' is invalid: {e}") from e

    def add(self, namespace: str, schemas: Mapping[str, SchemaInput]) -> None:
        """
        Add descriptors under '<namespace>.<name>', renaming them accordingly.

        Nothing is added unless every descriptor is accepted.

        Raises:
            SchemaError: If a descriptor is malformed, its name differs from its
                key, or the namespaced name is already registered
        """
        staged: Dict[str, ToolSchema] = {}
        for name, schema in schemas.items():
            tool = self._parse(name, schema)
            if tool.name != name:
                raise SchemaError(
                    f"[{self.unit_id}] Schema name '{tool.name}' must match key '{name}'"
                )
            namespaced = f"{namespace}.{name}"
            self._refuse_existing(namespaced)
            staged[namespaced] = tool.model_copy(update={"name": namespaced})
        self._schemas.update(staged)

    def _refuse_existing(self, name: str) -> None:
        if name in self._schemas:
            raise SchemaError(f"[{self.unit_id}] Schema '{name}' already registered")

    def get(self, name: str) -> Optional[ToolSchema]:
        return self._schemas.get(name)

    def has(self, name: str) -> bool:
        return name in self._schemas

    def list(self) -> List[str]:
        return list(self._schemas.keys())

    def to_json(self) -> Dict[str, Dict[str, Any]]:
        """Export as {name: descriptor dict}."""
        return {name: schema.to_json() for name, schema in self._schemas.items()}

    def to_list(self) -> List[Dict[str, Any]]:
        """Export as a list of descriptor dicts (tool-calling format)."""
        return [schema.to_json() for schema in self._schemas.values()]

    def to_record(self) -> Dict[str, ToolSchema]:
        return dict(self._schemas)

    def learn(self, contracts: Iterable["TeachingContract"]) -> None:
        """
        Import every descriptor of each contract under '<unit-id>.<name>'.

        Raises:
            SchemaError: If a taught descriptor's name differs from its capability
                or its namespaced name is already registered
        """
        for contract in contracts:
            for name, schema in contract.schema.to_record().items():
                if schema.name != name:
                    raise SchemaError(
                        f"[{self.unit_id}] Tool schema name '{schema.name}' must match "
                        f"capability '{name}' in unit '{contract.unit_id}'"
                    )
                namespaced = f"{contract.unit_id}.{name}"
                self._refuse_existing(namespaced)
                self._schemas[namespaced] = schema.model_copy(update={"name": namespaced})
            logger.debug(
                f"Learned {len(contract.schema)} schemas from {contract.unit_id}",
                extra={"unit_id": self.unit_id},
            )

    def remove(self, name: str) -> bool:
        return self._schemas.pop(name, None) is not None

    def clear(self) -> None:
        self._schemas.clear()

    def copy(self) -> "Schema":
        """Independent registry sharing the (frozen) descriptors."""
        clone = Schema(self.unit_id)
        clone._schemas = dict(self._schemas)
        return clone

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self.unit_id == other.unit_id and self._schemas == other._schemas

    def __repr__(self) -> str:
        return f"Schema({self.unit_id!r}, {self.list()!r})"
