"""
Serialization Utilities

to/from JSON for templates, in the wire shape the template store uses
(camelCase keys such as createdAt, fontSize, fontFamily).

Byte page backgrounds are written as data URLs so stored templates stay
plain JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.fields import Field
from ..models.templates import Template
from ..schemas.validator import validate_template
from .payloads import to_data_url


# ─────────────────────────────────────────────────────────────────────────────
# Template Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_template(template: Template) -> dict[str, Any]:
    """
    Serialize a Template to a dictionary.

    Args:
        template: Template to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "id": template.id,
        "name": template.name,
        "country": template.country,
        "pages": [p if isinstance(p, str) else to_data_url(p) for p in template.pages],
        "fields": [f.to_dict() for f in template.fields],
        "createdAt": template.created_at,
        "ownerId": template.owner_id,
    }


def deserialize_template(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Template:
    """
    Deserialize a Template from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate first
        strict: Use full JSON-schema validation

    Returns:
        Template instance

    Raises:
        TemplateValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_template(data, strict=strict)

    kwargs: dict[str, Any] = {}
    if data.get("createdAt"):
        kwargs["created_at"] = data["createdAt"]

    return Template(
        id=str(data["id"]),
        name=data["name"],
        country=data.get("country") or "kuwait",
        pages=tuple(data.get("pages") or ()),
        fields=tuple(Field.from_dict(f) for f in data.get("fields", [])),
        owner_id=data.get("ownerId"),
        **kwargs,
    )


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def load_template_json(path: Path, *, strict: bool = False) -> Template:
    """Load and validate a template JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return deserialize_template(data, strict=strict)


def save_template_json(template: Template, path: Path) -> None:
    """Write a template JSON file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_template(template), f, indent=2)
