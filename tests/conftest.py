"""
Shared pytest fixtures for unitcore tests.

This module provides common fixtures including:
- Configuration isolation (environment and config singleton)
- EventRecorder: collect events emitted by units
- Ready-made units and registries
"""

import os
import sys
from dataclasses import dataclass, field
from typing import List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from unitcore.modules.capabilities import Capabilities
from unitcore.modules.config import CONFIG_KEYS, CONFIG_FILE_ENV, reset_config
from unitcore.modules.events import Event
from unitcore.modules.schema import Schema
from unitcore.units import SimpleUnit


# =============================================================================
# Configuration Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Run every test against default configuration."""
    for spec in CONFIG_KEYS.values():
        monkeypatch.delenv(spec["env"], raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    reset_config()
    yield
    reset_config()


# =============================================================================
# Event Recording
# =============================================================================

@dataclass
class EventRecorder:
    """
    Handler that records every event it receives.

    Usage:
        def test_something(simple_unit, event_recorder):
            simple_unit.events.on("*", event_recorder)
            ...
            assert event_recorder.types == ["capability.executed"]
    """
    events: List[Event] = field(default_factory=list)

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    @property
    def types(self) -> List[str]:
        return [event.type for event in self.events]


@pytest.fixture
def event_recorder():
    return EventRecorder()


# =============================================================================
# Units and Registries
# =============================================================================

@pytest.fixture
def simple_unit():
    """SimpleUnit with the message used throughout the tests."""
    return SimpleUnit.create("hi")


@pytest.fixture
def strict_unit():
    return SimpleUnit.create("hi", strict_mode=True)


@pytest.fixture
def math_capabilities():
    """Capabilities of a small calculator unit (one sync, one async)."""

    def add(input):
        return input["a"] + input["b"]

    async def negate(input):
        return -input["value"]

    return Capabilities.create("math", {"add": add, "negate": negate})


@pytest.fixture
def math_schema():
    return Schema.create(
        "math",
        {
            "add": {
                "name": "add",
                "description": "Add two numbers",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "a": {"type": "number", "description": "First operand"},
                        "b": {"type": "number", "description": "Second operand"},
                    },
                    "required": ["a", "b"],
                },
                "response": {"type": "number"},
            },
            "negate": {
                "name": "negate",
                "description": "Negate a number",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "value": {"type": "number", "description": "Number to negate"},
                    },
                    "required": ["value"],
                },
                "response": {"type": "number"},
            },
        },
    )


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "cli: Tests driving the command line interface"
    )
