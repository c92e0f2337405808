import asyncio
import json
import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv

from unitcore.errors import UnitError
from unitcore.logging_config import configure_logging
from unitcore.modules.config import get_config
from unitcore.units import SimpleUnit

logger = logging.getLogger("unitcore.cli")


@click.group()
@click.option("--log-level", "log_level", default=None, help="Override UNITCORE_LOG_LEVEL")
def main(log_level: Optional[str]):
    """Inspect and call units."""
    load_dotenv()
    configure_logging(log_level or get_config().get("log_level", "INFO"))


@main.command()
@click.option("--message", "message", default="Hello from unitcore")
def describe(message: str):
    """Print a unit's help text."""
    click.echo(SimpleUnit.create(message).help())


@main.command()
@click.option("--message", "message", default="Hello from unitcore")
def schema(message: str):
    """Print the capability schemas as JSON."""
    unit = SimpleUnit.create(message)
    click.echo(json.dumps(unit.schema().to_json(), indent=2))


@main.command()
@click.argument("name")
@click.option("--args", "args", default=None, help="Capability input as a JSON object")
@click.option("--strict/--no-strict", "strict", default=None, help="Override UNITCORE_STRICT_MODE")
@click.option("--message", "message", default="Hello from unitcore")
def call(name: str, args: Optional[str], strict: Optional[bool], message: str):
    """Execute capability NAME and print its result as JSON."""
    try:
        payload = json.loads(args) if args else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--args") from e

    unit = SimpleUnit.create(message, strict_mode=strict)
    call_args = () if payload is None else (payload,)
    try:
        result = asyncio.run(unit.execute(name, *call_args))
    except UnitError as e:
        logger.debug(f"Call to {name} failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        # Failures raised inside the capability itself
        logger.debug(f"Capability {name} raised", exc_info=True)
        click.echo(f"Error: {type(e).__name__}: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result))


if __name__ == "__main__":
    main()
