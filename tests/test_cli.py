"""
Tests for the unitcore command line.
"""

import json

import pytest
from click.testing import CliRunner

import unitcore.__main__ as cli

pytestmark = pytest.mark.cli


@pytest.fixture
def runner(monkeypatch):
    # Keep the test process' logging setup untouched
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    return CliRunner()


def test_describe(runner):
    result = runner.invoke(cli.main, ["describe", "--message", "hi"])

    assert result.exit_code == 0
    assert "SimpleUnit Help:" in result.output
    assert "- Message: hi" in result.output


def test_schema(runner):
    result = runner.invoke(cli.main, ["schema"])

    assert result.exit_code == 0
    schemas = json.loads(result.output)
    assert set(schemas) == {"greet", "getMessage", "echo"}
    assert schemas["greet"]["parameters"]["required"] == ["name"]


def test_call(runner):
    result = runner.invoke(
        cli.main, ["call", "greet", "--args", '{"name": "Alice"}', "--message", "hi"]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == "Hello Alice! hi"


def test_call_without_args(runner):
    result = runner.invoke(cli.main, ["call", "getMessage", "--message", "stored"])

    assert result.exit_code == 0
    assert json.loads(result.output) == "stored"


def test_call_unknown_capability(runner):
    result = runner.invoke(cli.main, ["call", "nonexistentCapability"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_call_strict_validation(runner):
    result = runner.invoke(cli.main, ["call", "greet", "--args", "{}", "--strict"])

    assert result.exit_code == 1
    assert "Validation failed for 'greet'" in result.output


def test_call_bad_json(runner):
    result = runner.invoke(cli.main, ["call", "greet", "--args", "{name"])

    assert result.exit_code == 2
    assert "not valid JSON" in result.output


def test_call_capability_failure(runner):
    # Lenient mode lets the missing field through to the capability
    result = runner.invoke(cli.main, ["call", "greet", "--args", "{}", "--no-strict"])

    assert result.exit_code == 1
    assert "Error: KeyError" in result.output
