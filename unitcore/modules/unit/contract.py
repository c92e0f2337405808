"""Teaching contract: the trinity snapshot one unit hands to another."""

from dataclasses import dataclass

from unitcore.modules.capabilities import Capabilities
from unitcore.modules.schema import Schema
from unitcore.modules.validator import Validator


@dataclass(frozen=True)
class TeachingContract:
    """
    Snapshot of a unit's trinity.

    The registries are copies of the producer's, so a consumer adding or
    removing entries never changes the producer. Callables and (frozen)
    schema descriptors are shared.
    """

    unit_id: str
    capabilities: Capabilities
    schema: Schema
    validator: Validator

    @classmethod
    def snapshot(
        cls,
        unit_id: str,
        capabilities: Capabilities,
        schema: Schema,
        strict_mode: bool = False,
    ) -> "TeachingContract":
        caps = capabilities.copy()
        schemas = schema.copy()
        return cls(
            unit_id=unit_id,
            capabilities=caps,
            schema=schemas,
            validator=Validator(unit_id, caps, schemas, strict_mode=strict_mode),
        )
