"""
Tool schema models.

These models define the JSON-schema-like descriptor every capability
publishes. It is the one wire contract units expose to external tooling
(for example, handing a unit's capabilities to an agent as tools).
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Types

ValueType = Literal["string", "number", "boolean", "object", "array"]


class PropertySchema(BaseModel):
    """A single named parameter."""

    model_config = ConfigDict(frozen=True)

    type: ValueType
    description: str = Field(..., description="What the parameter means")
    enum: Optional[List[str]] = Field(None, description="Allowed values")


class ParametersSchema(BaseModel):
    """Parameter object of a capability."""

    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: Dict[str, PropertySchema] = Field(default_factory=dict)
    required: Optional[List[str]] = None

    @field_validator("required")
    @classmethod
    def required_must_be_declared(cls, v, info):
        """Every required field must appear in properties."""
        if v is None:
            return v
        properties = info.data.get("properties", {})
        missing = [name for name in v if name not in properties]
        if missing:
            raise ValueError(f"required fields not declared in properties: {', '.join(missing)}")
        return v


class ResponseProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    description: str = ""


class ResponseSchema(BaseModel):
    """Shape of a capability's return value."""

    model_config = ConfigDict(frozen=True)

    type: ValueType
    properties: Optional[Dict[str, ResponseProperty]] = None
    required: Optional[List[str]] = None


class ToolSchema(BaseModel):
    """Descriptor of one capability."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Capability name, must match its key")
    description: str = Field(..., min_length=1, description="What the capability does")
    parameters: ParametersSchema
    response: Optional[ResponseSchema] = None

    def to_json(self) -> Dict:
        """Wire representation with unset optional fields omitted."""
        return self.model_dump(exclude_none=True)
