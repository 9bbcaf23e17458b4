"""
formstamp Core Package

Shared data models and utilities: the percentage coordinate model,
Field/Template/DataRecord entities, template JSON serialization and
schema validation.
"""

from .models import Field, FieldType, Template, TemplateDraft, DataRecord, PhotoSet

__all__ = [
    "Field",
    "FieldType",
    "Template",
    "TemplateDraft",
    "DataRecord",
    "PhotoSet",
]
