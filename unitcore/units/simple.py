"""
SimpleUnit: the smallest complete unit.

Stores a message and exposes three capabilities (greet, getMessage, echo).
Used as the reference implementation of the unit contract.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from unitcore.modules.capabilities import Capabilities
from unitcore.modules.schema import Schema
from unitcore.modules.unit import Unit, UnitProps, create_unit_schema

SIMPLE_UNIT_ID = "simple-unit"
SIMPLE_UNIT_VERSION = "1.0.0"


@dataclass(frozen=True, kw_only=True)
class SimpleUnitProps(UnitProps):
    message: str


class SimpleUnit(Unit):
    """Unit holding a message it can greet with, return and echo."""

    @classmethod
    def create(cls, message: str, strict_mode: Optional[bool] = None) -> "SimpleUnit":
        props = SimpleUnitProps(
            dna=create_unit_schema(id=SIMPLE_UNIT_ID, version=SIMPLE_UNIT_VERSION),
            message=message,
            strict_mode=strict_mode,
        )
        return cls._construct(props)

    @property
    def message(self) -> str:
        return self.props.message

    def capabilities(self) -> Capabilities:
        return Capabilities.create(
            self.dna.id,
            {
                "greet": self.greet,
                "getMessage": self.get_message,
                "echo": self.echo,
            },
        )

    def schema(self) -> Schema:
        return Schema.create(
            self.dna.id,
            {
                "greet": {
                    "name": "greet",
                    "description": "Greet someone with a personalized message",
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string", "description": "Name of the person to greet"}
                        },
                        "required": ["name"],
                    },
                    "response": {"type": "string"},
                },
                "getMessage": {
                    "name": "getMessage",
                    "description": "Get the unit's stored message",
                    "parameters": {"type": "object", "properties": {}},
                    "response": {"type": "string"},
                },
                "echo": {
                    "name": "echo",
                    "description": "Echo back the input message",
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "text": {"type": "string", "description": "Text to echo back"}
                        },
                        "required": ["text"],
                    },
                    "response": {"type": "string"},
                },
            },
        )

    async def greet(self, input: Dict[str, Any]) -> str:
        return f"Hello {input['name']}! {self.message}"

    async def get_message(self, input: Optional[Dict[str, Any]] = None) -> str:
        return self.message

    async def echo(self, input: Dict[str, Any]) -> str:
        return f"Echo: {input['text']}"

    def whoami(self) -> str:
        return f"{super().whoami()}: {self.message}"

    def help(self) -> str:
        return "\n".join(
            [
                super().help(),
                f"- Message: {self.message}",
                f"- Created: {self.props.created.isoformat()}",
                "",
                "Usage:",
                "  await unit.execute('greet', {'name': 'Alice'})",
                "  await unit.execute('getMessage')",
                "  await unit.execute('echo', {'text': 'Hello World'})",
            ]
        )


def create_simple_unit(message: str, strict_mode: Optional[bool] = None) -> SimpleUnit:
    """Module-level constructor for SimpleUnit."""
    return SimpleUnit.create(message, strict_mode=strict_mode)
