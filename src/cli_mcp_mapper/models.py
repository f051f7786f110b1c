"""Pydantic models for command definitions."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class _Parameter(BaseModel):
    """Fields shared by every parameter type."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    description: str = Field("", description="Human readable description shown to the client")
    required: bool = Field(False, description="Whether the client must supply a value")
    enum: Optional[List[Any]] = Field(None, description="Allowed values")
    default: Any = Field(None, description="Advertised default; never substituted into the command")
    position: Optional[int] = Field(None, description="Ordinal slot for a positional argument")
    arg_name: Optional[str] = Field(None, alias="argName", description="Flag token, e.g. '-m'")
    arg_value: Optional[str] = Field(None, alias="argValue", description="Literal emitted after a boolean flag")

    @property
    def is_positional(self) -> bool:
        return self.position is not None

    @property
    def has_default(self) -> bool:
        # Presence, not truthiness: 0, false and "" are legitimate defaults.
        return "default" in self.model_fields_set

    @property
    def has_enum(self) -> bool:
        return self.enum is not None

    @model_validator(mode="after")
    def _named_parameters_need_flag(self) -> "_Parameter":
        if self.position is None and not self.arg_name:
            raise ValueError("parameters without 'position' must declare 'argName'")
        return self


class StringParameter(_Parameter):
    type: Literal["string"] = "string"


class NumberParameter(_Parameter):
    type: Literal["number"] = "number"


class BooleanParameter(_Parameter):
    type: Literal["boolean"] = "boolean"


ParameterSpec = Annotated[
    Union[StringParameter, NumberParameter, BooleanParameter],
    Field(discriminator="type"),
]


class CommandSpec(BaseModel):
    """A single configured command, exposed as one MCP tool."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    command: str = Field(..., min_length=1, description="Executable name or path")
    description: str = Field(..., min_length=1, description="Tool description")
    base_args: List[str] = Field(default_factory=list, alias="baseArgs")
    parameters: Dict[str, ParameterSpec] = Field(default_factory=dict)

    @field_validator("base_args", "parameters", mode="before")
    @classmethod
    def _null_means_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "base_args" else {}
        return value


class MapperConfig(BaseModel):
    """The whole configuration document."""
    model_config = ConfigDict(frozen=True)

    commands: Dict[str, CommandSpec] = Field(default_factory=dict)
