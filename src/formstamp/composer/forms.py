"""
Module: composer.forms

Purpose:
    Helpers for building the data-entry form that feeds the composer:
    which templates belong to a layout family, which fields the form must
    ask for, and how complete a record is.

Key Functions:
    - templates_for_country(): Filter templates by layout family
    - collect_form_fields(): Unique fields across templates (photos excluded)
    - completion_percentage(): Filled fields and photos as a percentage
"""

from __future__ import annotations

import math
from typing import Iterable

from formstamp.core.models.fields import Field
from formstamp.core.models.records import DataRecord
from formstamp.core.models.templates import Template

from .layout.values import RESERVED_PHOTO_KEYS

PHOTO_SLOT_COUNT = 3


def templates_for_country(templates: Iterable[Template], country: str) -> list[Template]:
    return [t for t in templates if t.country == country]


def collect_form_fields(templates: Iterable[Template]) -> list[Field]:
    """
    Fields a form must ask for, one per key.

    The first field seen for a key wins. Photo keys are excluded since
    photos are captured separately.
    """
    seen: dict[str, Field] = {}
    for template in templates:
        for field in template.fields:
            if field.key in RESERVED_PHOTO_KEYS or field.key in seen:
                continue
            seen[field.key] = field
    return list(seen.values())


def completion_percentage(record: DataRecord, fields: Iterable[Field]) -> int:
    """
    Rounded percentage of form fields and photo slots filled.

    Returns 0 when there are no fields to fill.

    Example:
        >>> completion_percentage(DataRecord.from_dict({"fullName": "A"}), [name_field])
        25
    """
    fields = list(fields)
    if not fields:
        return 0
    filled = sum(1 for f in fields if record.get(f.key))
    total = len(fields) + PHOTO_SLOT_COUNT
    # Halves round up
    return math.floor((filled + record.photos.filled_count) / total * 100 + 0.5)
