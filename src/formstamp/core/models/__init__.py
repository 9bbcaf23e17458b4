"""
Core Models Package

Validated data models shared by the editor and the composer.

Field and Template are frozen dataclasses; edits produce new instances
(TemplateDraft is the one mutable working copy). All geometry is a
percentage of the page (see geometry.py).
"""

from .geometry import PercentRect, AbsoluteRect, to_absolute, to_percent, round_percent, clamp
from .fields import Field, FieldType, FieldCategory, FontFamily, Alignment
from .templates import Template, TemplateDraft
from .records import DataRecord, PhotoSet

__all__ = [
    "PercentRect",
    "AbsoluteRect",
    "to_absolute",
    "to_percent",
    "round_percent",
    "clamp",
    "Field",
    "FieldType",
    "FieldCategory",
    "FontFamily",
    "Alignment",
    "Template",
    "TemplateDraft",
    "DataRecord",
    "PhotoSet",
]
