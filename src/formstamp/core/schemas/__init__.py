"""
Schemas Package

JSON schema definition and validation for stored templates.
"""

from .validator import validate_template, TEMPLATE_SCHEMA_NAME

__all__ = [
    "validate_template",
    "TEMPLATE_SCHEMA_NAME",
]
