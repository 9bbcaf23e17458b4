"""
Schema Validation Utilities

Validates stored template JSON before it is turned into a Template.

Basic checks (required keys, known enum values, field geometry types)
always run; strict mode additionally validates against
template.schema.json with jsonschema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from formstamp.errors import TemplateValidationError

TEMPLATE_SCHEMA_NAME = "template"

_FIELD_TYPES = ("text", "checkmark", "boolean", "image")

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def validate_template(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate template data.

    Args:
        data: Template dictionary (wire format)
        strict: If True, also validate against the JSON schema

    Raises:
        TemplateValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise TemplateValidationError("Template must be an object")

    required = ["id", "name", "pages", "fields"]
    missing = [f for f in required if f not in data]
    if missing:
        raise TemplateValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    if not isinstance(data["pages"], list):
        raise TemplateValidationError("pages must be a list", path="pages")

    fields = data["fields"]
    if not isinstance(fields, list):
        raise TemplateValidationError("fields must be a list", path="fields")
    for i, field in enumerate(fields):
        _validate_field(field, f"fields[{i}]")

    if strict:
        schema = _load_schema(TEMPLATE_SCHEMA_NAME)
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise TemplateValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e


def _validate_field(data: Any, path: str) -> None:
    """Validate one field entry."""
    if not isinstance(data, dict):
        raise TemplateValidationError("field must be an object", path=path)

    required = ["id", "key", "x", "y", "width", "height"]
    missing = [f for f in required if f not in data]
    if missing:
        raise TemplateValidationError(
            f"Field missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )

    for name in ("id", "key"):
        if not isinstance(data[name], str):
            raise TemplateValidationError(
                f"Invalid {name}: {data[name]!r} (must be a string)",
                path=f"{path}.{name}"
            )

    for coord in ("x", "y", "width", "height"):
        value = data[coord]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TemplateValidationError(
                f"Invalid {coord}: {value!r} (must be a number)",
                path=f"{path}.{coord}"
            )

    field_type = data.get("type", "text")
    if field_type not in _FIELD_TYPES:
        raise TemplateValidationError(
            f"Invalid field type: {field_type!r}",
            path=f"{path}.type"
        )

    page = data.get("page", 1)
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise TemplateValidationError(
            f"Invalid page: {page!r} (must be a positive integer)",
            path=f"{path}.page"
        )
