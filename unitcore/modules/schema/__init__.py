"""
Schema Module - Black Box Interface

Purpose: Describe each capability in a machine-readable form
Interface: Schema.create()/get()/to_json()/learn(), ToolSchema
Hidden: Descriptor parsing (pydantic), namespacing of learned schemas
"""

from .models import (
    ParametersSchema,
    PropertySchema,
    ResponseProperty,
    ResponseSchema,
    ToolSchema,
)
from .schema import Schema

__all__ = [
    "Schema",
    "ToolSchema",
    "ParametersSchema",
    "PropertySchema",
    "ResponseSchema",
    "ResponseProperty",
]
