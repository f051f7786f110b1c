"""Build MCP tool input schemas from parameter definitions."""

from typing import Any, Mapping, Optional

from .models import ParameterSpec


def build_input_schema(parameters: Optional[Mapping[str, ParameterSpec]]) -> dict[str, Any]:
    """
    Build the JSON schema advertised for a tool's input.

    Each parameter becomes a property carrying its ``type`` and ``description``.
    ``enum`` and ``default`` are only included when the parameter declares them,
    so falsy defaults such as ``0`` or ``false`` are kept. ``required`` lists the
    required parameter names in declaration order.

    Args:
        parameters: Parameter definitions keyed by name, or None.

    Returns:
        A JSON schema object: ``{"type": "object", "properties": ..., "required": ...}``.
    """
    properties: dict[str, dict[str, Any]] = {}
    required: list[str] = []

    for name, param in (parameters or {}).items():
        prop: dict[str, Any] = {
            "type": param.type,
            "description": param.description,
        }
        if param.has_enum:
            prop["enum"] = list(param.enum)
        if param.has_default:
            prop["default"] = param.default
        properties[name] = prop

        if param.required is True:
            required.append(name)

    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }
