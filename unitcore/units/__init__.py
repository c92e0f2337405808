"""Concrete units built on unitcore.modules.unit."""

from .simple import SimpleUnit, SimpleUnitProps, create_simple_unit

__all__ = ["SimpleUnit", "SimpleUnitProps", "create_simple_unit"]
