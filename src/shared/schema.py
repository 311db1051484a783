"""JSON Schema helpers for tool input contracts."""

from typing import Any

from jsonschema import Draft7Validator

TYPE_MAPPING = {
    "string": "string",
    "str": "string",
    "integer": "integer",
    "int": "integer",
    "number": "number",
    "float": "number",
    "boolean": "boolean",
    "bool": "boolean",
}


def validate_schema(data: Any, schema: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate data against a JSON Schema.

    Args:
        data: The data to validate
        schema: JSON Schema to validate against

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    if not schema:
        return True, []

    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))

    if not errors:
        return True, []

    error_messages = [
        f"{'.'.join(str(p) for p in e.path)}: {e.message}" if e.path else e.message
        for e in errors
    ]

    return False, error_messages


def missing_required(data: dict[str, Any], schema: dict[str, Any]) -> list[str]:
    """Return the schema's required field names absent from data, in schema order."""
    return [name for name in schema.get("required", []) if name not in data]


def create_tool_schema(parameters: list[dict[str, Any]]) -> dict[str, Any]:
    """
    Create a JSON Schema from a list of parameter definitions.

    Args:
        parameters: Parameter definitions with name, type, description,
            and optionally required and default

    Returns:
        JSON Schema dictionary
    """
    properties = {}

    for param in parameters:
        param_schema: dict[str, Any] = {
            "type": TYPE_MAPPING.get(param.get("type", "string"), "string"),
            "description": param.get("description", ""),
        }

        if param.get("default") is not None:
            param_schema["default"] = param["default"]

        properties[param["name"]] = param_schema

    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
    }

    required = [p["name"] for p in parameters if p.get("required", True)]
    if required:
        schema["required"] = required

    return schema
