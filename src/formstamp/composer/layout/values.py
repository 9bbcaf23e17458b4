"""
Module: composer.layout.values

Purpose:
    Value resolution and normalisation rules applied per field before
    drawing: photo-key lookup, absence test, checkmark truthiness and date
    reformatting.

Key Functions:
    - resolve_value(key, record): Flat lookup, or photo slot for reserved keys
    - is_absent(value): Nothing to draw
    - is_marked(value): Checkmark/boolean truth table
    - is_date_key(key): Whether a text field gets date formatting
    - format_date(raw): ISO-like date -> "DD MON YYYY"
    - to_text(value): Text rendering of a value

Used By:
    - composer.layout.planner
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from formstamp.core.models.records import DataRecord

# Reserved keys that read from the record's photo sub-mapping.
# Closed set: new reserved keys are never inferred.
PHOTO_KEYS: dict[str, str] = {
    "photoFace": "face",
    "photoFull": "full",
    "photoPassport": "passport",
}
RESERVED_PHOTO_KEYS = frozenset(PHOTO_KEYS)

BIRTH_DATE_KEY = "dob"

MARK_TRUE_VALUES = frozenset({"true", "YES", "X"})

MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")

# Non-ISO layouts accepted after fromisoformat fails
_EXTRA_DATE_FORMATS = ("%Y/%m/%d", "%Y.%m.%d")


def resolve_value(key: str, record: DataRecord) -> Any:
    """Look up the value a field with this key should draw."""
    slot = PHOTO_KEYS.get(key)
    if slot is not None:
        return getattr(record.photos, slot)
    return record.get(key)


def is_absent(value: Any) -> bool:
    """
    True when a field has nothing to draw.

    None, False and empty strings or bytes are absent. Numeric zero and
    empty collections are present.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes, bytearray)):
        return len(value) == 0
    return False


def is_marked(value: Any) -> bool:
    """
    Checkmark/boolean truth table.

    Only True and the exact strings "true", "YES" and "X" draw a mark.
    """
    if value is True:
        return True
    return isinstance(value, str) and value in MARK_TRUE_VALUES


def is_date_key(key: str) -> bool:
    return "date" in key.lower() or key == BIRTH_DATE_KEY


def _parse_date(raw: str) -> Optional[date]:
    text = raw.strip()
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso).date()
    except ValueError:
        pass
    for fmt in _EXTRA_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_date(raw: str) -> str:
    """
    Reformat an ISO-like date as "DD MON YYYY".

    Unparsable input is returned unchanged.

    Example:
        >>> format_date("2024-03-05")
        '05 MAR 2024'
        >>> format_date("N/A")
        'N/A'
    """
    parsed = _parse_date(raw)
    if parsed is None:
        return raw
    return f"{parsed.day:02d} {MONTHS[parsed.month - 1]} {parsed.year}"


def to_text(value: Any) -> str:
    """String form of a record value (booleans in lower case)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
