"""
Module: records

Purpose:
    DataRecord - the runtime key/value input used to fill one template.
    A flat mapping plus a reserved photo sub-mapping with exactly three
    slots (face, full body, passport scan).

Key Classes:
    - PhotoSet: The three reserved photo payloads
    - DataRecord: Flat values plus photos

Used By:
    - composer.layout.planner: Value resolution
    - composer.controller: Output naming
    - composer.forms: Completion tracking
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

DISPLAY_NAME_KEY = "fullName"
DEFAULT_DISPLAY_NAME = "Export"


@dataclass(frozen=True, slots=True)
class PhotoSet:
    """Photo payloads captured separately from typed form fields."""

    face: Optional[Any] = None
    full: Optional[Any] = None
    passport: Optional[Any] = None

    @property
    def filled_count(self) -> int:
        return sum(1 for p in (self.face, self.full, self.passport) if p)

    def to_dict(self) -> dict[str, Any]:
        return {"face": self.face, "full": self.full, "passport": self.passport}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> PhotoSet:
        data = data or {}
        return cls(face=data.get("face"), full=data.get("full"), passport=data.get("passport"))


@dataclass(frozen=True)
class DataRecord:
    """
    Key/value input for one output document (immutable).

    Attributes:
        values: Flat mapping of field key -> text, bool, number or image payload
        photos: Reserved photo sub-mapping

    Example:
        >>> record = DataRecord.from_dict({"fullName": "JOHN SMITH", "photos": {"face": None}})
        >>> record.get("fullName")
        'JOHN SMITH'
        >>> record.display_name
        'JOHN SMITH'
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    photos: PhotoSet = field(default_factory=PhotoSet)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    @property
    def display_name(self) -> str:
        """Name used for output artifacts."""
        return str(self.values.get(DISPLAY_NAME_KEY) or DEFAULT_DISPLAY_NAME)

    def with_values(self, **updates: Any) -> DataRecord:
        """Copy with some flat values replaced."""
        return DataRecord(values={**self.values, **updates}, photos=self.photos)

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DataRecord:
        """Build from a plain mapping; a "photos" entry becomes the PhotoSet."""
        values = {k: v for k, v in data.items() if k != "photos"}
        return cls(values=values, photos=PhotoSet.from_dict(data.get("photos")))

    @classmethod
    def from_form_input(cls, data: Mapping[str, Any]) -> DataRecord:
        """
        Build from raw form entry, upper-casing typed strings.

        Photo payloads and non-string values are kept as given.
        """
        record = cls.from_dict(data)
        values = {
            k: v.upper() if isinstance(v, str) and not v.startswith("data:image") else v
            for k, v in record.values.items()
        }
        return cls(values=values, photos=record.photos)

    def to_dict(self) -> dict[str, Any]:
        return {**self.values, "photos": self.photos.to_dict()}
