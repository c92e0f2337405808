"""
Unit tests for SimpleUnit and the introspection contract every unit shares.
"""

import pytest

from unitcore.errors import CapabilityNotFoundError, ValidationFailedError
from unitcore.modules.capabilities import Capabilities
from unitcore.modules.schema import Schema
from unitcore.modules.validator import Validator
from unitcore.units import SimpleUnit, create_simple_unit


class TestConstruction:
    """Factory-only construction."""

    def test_create(self, simple_unit):
        assert simple_unit.dna.id == "simple-unit"
        assert simple_unit.dna.version == "1.0.0"
        assert simple_unit.message == "hi"

    def test_direct_construction_refused(self, simple_unit):
        with pytest.raises(TypeError, match="SimpleUnit.create"):
            SimpleUnit(simple_unit.props)

    def test_module_constructor(self):
        unit = create_simple_unit("hey")
        assert isinstance(unit, SimpleUnit)
        assert unit.message == "hey"

    def test_whoami(self, simple_unit):
        assert simple_unit.whoami() == "SimpleUnit[simple-unit@1.0.0]: hi"

    def test_equals(self, simple_unit):
        assert simple_unit.equals(simple_unit)
        assert not simple_unit.equals(SimpleUnit.create("other"))
        assert not simple_unit.equals("hi")


class TestIntrospection:
    """capabilities()/schema()/validator()/help()."""

    def test_capabilities_and_schema_share_keys(self, simple_unit):
        assert set(simple_unit.capabilities().list()) == set(simple_unit.schema().list())
        assert simple_unit.get_capabilities() == ["greet", "getMessage", "echo"]

    def test_trinity_methods_are_pure(self, simple_unit):
        first, second = simple_unit.capabilities(), simple_unit.capabilities()
        assert first == second
        assert first is not second
        assert simple_unit.schema() == simple_unit.schema()
        assert simple_unit.validator() == simple_unit.validator()

    def test_types(self, simple_unit):
        assert isinstance(simple_unit.capabilities(), Capabilities)
        assert isinstance(simple_unit.schema(), Schema)
        assert isinstance(simple_unit.validator(), Validator)
        assert simple_unit.validator().is_valid()

    def test_get_schema(self, simple_unit):
        assert simple_unit.has_schema("greet")
        assert simple_unit.get_schema("greet").parameters.required == ["name"]
        assert simple_unit.get_schema("missing") is None
        assert simple_unit.can("echo")
        assert not simple_unit.can("missing")

    def test_help(self, simple_unit):
        text = simple_unit.help()
        assert "SimpleUnit Help:" in text
        assert "- ID: simple-unit" in text
        assert "greet(name: string) -> string" in text
        assert "- Message: hi" in text
        assert "await unit.execute('greet', {'name': 'Alice'})" in text

    def test_help_with_empty_message(self):
        assert "- Message: " in SimpleUnit.create("").help()


class TestExecution:
    """execute() through the validator."""

    @pytest.mark.asyncio
    async def test_greet(self, simple_unit):
        assert await simple_unit.execute("greet", {"name": "Alice"}) == "Hello Alice! hi"

    @pytest.mark.asyncio
    async def test_get_message(self, simple_unit):
        assert await simple_unit.execute("getMessage") == "hi"

    @pytest.mark.asyncio
    async def test_echo(self, simple_unit):
        assert await simple_unit.execute("echo", {"text": "Hello World"}) == "Echo: Hello World"

    @pytest.mark.asyncio
    async def test_direct_method_call(self, simple_unit):
        assert await simple_unit.greet({"name": "Bob"}) == "Hello Bob! hi"

    @pytest.mark.asyncio
    async def test_nonexistent_capability(self, simple_unit):
        with pytest.raises(CapabilityNotFoundError) as exc_info:
            await simple_unit.execute("nonexistentCapability")

        assert exc_info.value.unit_id == "simple-unit"
        assert exc_info.value.name == "nonexistentCapability"

    @pytest.mark.asyncio
    async def test_strict_rejects_missing_field(self, strict_unit):
        with pytest.raises(ValidationFailedError) as exc_info:
            await strict_unit.execute("greet", {"who": "Alice"})

        assert exc_info.value.capability == "greet"
        assert exc_info.value.field == "name"
        assert exc_info.value.constraint == "required"

    @pytest.mark.asyncio
    async def test_strict_from_config(self, monkeypatch):
        monkeypatch.setenv("UNITCORE_STRICT_MODE", "true")
        from unitcore.modules.config import reset_config

        reset_config()
        unit = SimpleUnit.create("hi")

        assert unit.strict_mode is True
        with pytest.raises(ValidationFailedError):
            await unit.execute("echo", {"text": 42})

    @pytest.mark.asyncio
    async def test_lenient_lets_platform_error_through(self, simple_unit):
        with pytest.raises(KeyError):
            await simple_unit.execute("greet", {"who": "Alice"})
