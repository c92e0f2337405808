"""
Unit tests for the Events Module and unit event emission.

Tests cover:
- Exact, "*" and dotted wildcard subscriptions
- once()/off()/unsubscribe handling
- Events emitted by units while executing and learning
"""

from unittest.mock import MagicMock

import pytest

from unitcore.errors import CapabilityNotFoundError
from unitcore.modules.events import Event, EventEmitter, matches
from unitcore.modules.unit import TeachingContract


@pytest.fixture
def emitter():
    return EventEmitter()


def emit_all(emitter, *types):
    for event_type in types:
        emitter.emit(Event(type=event_type))


def received(handler):
    return [c.args[0].type for c in handler.call_args_list]


class TestPatternMatching:
    """Tests for matches()."""

    @pytest.mark.parametrize(
        "pattern,event_type,expected",
        [
            ("*", "anything.at.all", True),
            ("test.event", "test.event", True),
            ("test.*", "test.event", True),
            ("test.*", "test.", True),
            ("test.*", "test", False),
            ("test.*", ".test", False),
            ("test.*", "test.event.more", False),
            ("*.error", "user.error", True),
            ("*.error", "error", False),
            ("*.error", "system.error.fatal", False),
            ("weather.current.*", "weather.current", False),
            ("test*", "test.event", False),
            ("test*", "test*", True),
        ],
    )
    def test_matches(self, pattern, event_type, expected):
        assert matches(pattern, event_type) is expected


class TestEmitter:
    """Tests for EventEmitter subscriptions."""

    def test_wildcard_catches_all(self, emitter):
        handler = MagicMock()
        emitter.on("*", handler)

        emit_all(emitter, "test.event1", "test.event2", "other.event")

        assert received(handler) == ["test.event1", "test.event2", "other.event"]

    def test_all_handler_kinds_get_same_event(self, emitter):
        exact, wildcard, pattern = MagicMock(), MagicMock(), MagicMock()
        emitter.on("test.event", exact)
        emitter.on("*", wildcard)
        emitter.on("test.*", pattern)

        event = Event(type="test.event", data={"key": "value"})
        emitter.emit(event)

        exact.assert_called_once_with(event)
        wildcard.assert_called_once_with(event)
        pattern.assert_called_once_with(event)

    def test_unsubscribe(self, emitter):
        handler = MagicMock()
        unsubscribe = emitter.on("*", handler)

        emit_all(emitter, "test.event")
        unsubscribe()
        emit_all(emitter, "test.event2")

        handler.assert_called_once()
        assert emitter.event_types() == []

    def test_once(self, emitter):
        handler = MagicMock()
        emitter.once("test.*", handler)

        emit_all(emitter, "test.event1", "test.event2")

        assert received(handler) == ["test.event1"]
        assert not emitter.has_handlers("test.*")

    def test_off_removes_all_for_pattern(self, emitter):
        first, second = MagicMock(), MagicMock()
        emitter.on("test.*", first)
        emitter.on("test.*", second)
        assert emitter.listener_count("test.*") == 2

        emitter.off("test.*")
        emit_all(emitter, "test.event")

        first.assert_not_called()
        second.assert_not_called()

    def test_same_handler_registered_once(self, emitter):
        handler = MagicMock()
        emitter.on("a.b", handler)
        emitter.on("a.b", handler)
        assert emitter.listener_count("a.b") == 1

    def test_remove_all_listeners(self, emitter):
        emitter.on("a.b", MagicMock())
        emitter.on("*", MagicMock())
        emitter.remove_all_listeners()
        assert emitter.event_types() == []


class TestUnitEvents:
    """Events emitted by units."""

    @pytest.mark.asyncio
    async def test_executed(self, simple_unit, event_recorder):
        simple_unit.events.on("capability.*", event_recorder)

        await simple_unit.execute("getMessage")

        assert event_recorder.types == ["capability.executed"]
        assert event_recorder.events[0].data == {"unit_id": "simple-unit", "capability": "getMessage"}

    @pytest.mark.asyncio
    async def test_failed(self, simple_unit, event_recorder):
        simple_unit.events.on("*.failed", event_recorder)

        with pytest.raises(CapabilityNotFoundError):
            await simple_unit.execute("missing")

        event = event_recorder.events[0]
        assert event.type == "capability.failed"
        assert event.error.code == "CapabilityNotFoundError"
        assert "missing" in event.error.message

    def test_learned(self, simple_unit, event_recorder, math_capabilities, math_schema):
        simple_unit.events.on("unit.learned", event_recorder)

        simple_unit.learn([TeachingContract.snapshot("math", math_capabilities, math_schema)])

        assert event_recorder.events[0].data["learned"] == ["math"]

    @pytest.mark.asyncio
    async def test_disabled_by_config(self, monkeypatch, event_recorder):
        monkeypatch.setenv("UNITCORE_EMIT_EVENTS", "false")
        from unitcore.modules.config import reset_config
        from unitcore.units import SimpleUnit

        reset_config()
        unit = SimpleUnit.create("quiet")
        unit.events.on("*", event_recorder)

        await unit.execute("getMessage")

        assert event_recorder.events == []
