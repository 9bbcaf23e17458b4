"""
Module: fields

Purpose:
    Provides the Field dataclass - a single named, positioned and styled
    placeholder on a template page, bound to one data-record key.
    Geometry is page-relative (percent), never relative to other fields.

Key Functions:
    - Field.rect: Geometry as a PercentRect
    - Field.rgb: Parsed colour triple
    - Field.with_geometry(...): Copy with clamped geometry
    - Field.to_dict() / Field.from_dict(): Serialization
    - default_footprint(field_type): Seed size for a new field
    - hex_to_rgb(hex): Colour parsing

Dependencies:
    - dataclasses (std)
    - .geometry: PercentRect, clamp helpers

Used By:
    - core.models.templates
    - editor.session
    - composer.layout.planner
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .geometry import PERCENT_MAX, PercentRect


class FieldType(str, Enum):
    """Render behaviour of a field."""
    TEXT = "text"
    CHECKMARK = "checkmark"
    BOOLEAN = "boolean"
    IMAGE = "image"

    def __str__(self) -> str:
        return self.value


class FieldCategory(str, Enum):
    """Grouping tag for presentation only. Never affects rendering."""
    PERSONAL = "personal"
    PASSPORT = "passport"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    CONTACT = "contact"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


class FontFamily(str, Enum):
    """Fixed set of base-14 PDF font families."""
    HELVETICA = "Helvetica"
    TIMES = "Times"
    COURIER = "Courier"

    def __str__(self) -> str:
        return self.value


class Alignment(str, Enum):
    """Horizontal text alignment within a field."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.value


DEFAULT_ORIGIN = (20.0, 20.0)
DEFAULT_FONT_SIZE = 12.0
DEFAULT_COLOR = "#000000"

# (width, height) in percent
_FOOTPRINTS: dict[FieldType, tuple[float, float]] = {
    FieldType.CHECKMARK: (4.0, 4.0),
    FieldType.BOOLEAN: (4.0, 4.0),
    FieldType.IMAGE: (30.0, 40.0),
    FieldType.TEXT: (40.0, 6.0),
}

_HEX_COLOR = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def default_footprint(field_type: FieldType) -> tuple[float, float]:
    """
    Seed (width, height) for a newly added field.

    Checkmarks get a small square, images a large rectangle and text a
    wide short strip.
    """
    return _FOOTPRINTS[FieldType(field_type)]


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """
    Parse a #RRGGBB colour.

    Malformed input falls back to black.

    Example:
        >>> hex_to_rgb("#FF8000")
        (255, 128, 0)
    """
    match = _HEX_COLOR.match(value or "")
    if not match:
        return (0, 0, 0)
    return tuple(int(group, 16) for group in match.groups())  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class Field:
    """
    Positioned placeholder on a template page (immutable).

    Attributes:
        id: Unique within a template
        key: Data-record key this field binds to
        label: Human readable name (editor placeholder only)
        x, y, width, height: Percent of page width/height
        page: 1-indexed page number
        type: Render behaviour (text, checkmark, boolean, image)
        category: Presentation group
        font_size: Configured font size in points (auto-fit upper bound)
        font_family: One of FontFamily
        color: "#RRGGBB"
        bold, italic: Style flags (four font variants)
        align: Horizontal alignment

    Invariants:
        - 0 <= width, height <= 100
        - x + width <= 100 and y + height <= 100
        - page >= 1
        - font_size > 0

    Example:
        >>> f = Field("f1", "fullName", "Full Name", 10, 10, 50, 6, page=1)
        >>> f.rect.width
        50
    """

    id: str
    key: str
    label: str
    x: float
    y: float
    width: float
    height: float
    page: int = 1
    type: FieldType = FieldType.TEXT
    category: FieldCategory = FieldCategory.PERSONAL
    font_size: float = DEFAULT_FONT_SIZE
    font_family: FontFamily = FontFamily.HELVETICA
    color: str = DEFAULT_COLOR
    bold: bool = False
    italic: bool = False
    align: Alignment = Alignment.LEFT

    def __post_init__(self) -> None:
        """Validate field on construction."""
        # Coerce enum-valued attributes given as plain strings
        object.__setattr__(self, "type", FieldType(self.type))
        object.__setattr__(self, "category", FieldCategory(self.category))
        object.__setattr__(self, "font_family", FontFamily(self.font_family))
        object.__setattr__(self, "align", Alignment(self.align))

        if not self.key:
            raise ValueError("key must not be empty")
        if self.page < 1:
            raise ValueError(f"page must be >= 1: {self.page}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")
        if not (0 <= self.width <= PERCENT_MAX and 0 <= self.height <= PERCENT_MAX):
            raise ValueError(f"size out of range: {self.width}x{self.height}")
        if not self.rect.fits_page(tolerance=1e-6):
            raise ValueError(
                f"Field {self.key!r} does not fit the page: "
                f"x={self.x}, y={self.y}, w={self.width}, h={self.height}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def rect(self) -> PercentRect:
        """Geometry as a PercentRect."""
        return PercentRect(self.x, self.y, self.width, self.height)

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Text colour as an (r, g, b) triple of 0-255 ints."""
        return hex_to_rgb(self.color)

    @property
    def is_image(self) -> bool:
        return self.type is FieldType.IMAGE

    # ─────────────────────────────────────────────────────────────────────────
    # Copies
    # ─────────────────────────────────────────────────────────────────────────

    def with_geometry(
        self,
        *,
        x: float | None = None,
        y: float | None = None,
        width: float | None = None,
        height: float | None = None,
    ) -> Field:
        """
        Copy with new geometry, clamped into the page.

        Size is clamped first so the origin is bounded by the new size.
        """
        rect = PercentRect(
            self.x if x is None else x,
            self.y if y is None else y,
            self.width if width is None else width,
            self.height if height is None else height,
        ).clamped()
        return replace(self, x=rect.x, y=rect.y, width=rect.width, height=rect.height)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the template wire keys."""
        return {
            "id": self.id,
            "key": self.key,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "page": self.page,
            "type": self.type.value,
            "category": self.category.value,
            "fontSize": self.font_size,
            "fontFamily": self.font_family.value,
            "color": self.color,
            "bold": self.bold,
            "italic": self.italic,
            "align": self.align.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Field:
        """
        Deserialize from the template wire format.

        Missing style attributes take the editor defaults. Stored geometry
        is clamped rather than rejected.
        """
        rect = PercentRect(
            float(data["x"]), float(data["y"]),
            float(data["width"]), float(data["height"]),
        ).clamped()
        return cls(
            id=str(data["id"]),
            key=data["key"],
            label=data.get("label", data["key"]),
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            page=int(data.get("page", 1)),
            type=FieldType(data.get("type", "text")),
            category=FieldCategory(data.get("category", "personal")),
            font_size=float(data.get("fontSize") or DEFAULT_FONT_SIZE),
            font_family=FontFamily(data.get("fontFamily") or "Helvetica"),
            color=data.get("color") or DEFAULT_COLOR,
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            align=Alignment(data.get("align") or "left"),
        )
