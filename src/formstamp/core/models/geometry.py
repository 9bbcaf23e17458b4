"""
Module: geometry

Purpose:
    Percentage-based coordinate model shared by the layout editor and the
    composer. Field geometry is stored as a percentage of the page width
    and height, so the same values drive an on-screen box and a printed
    page. Converting to a concrete medium is a scalar multiply.

Key Functions:
    - to_absolute(percent, dimension): Percent -> absolute units
    - to_percent(absolute, dimension): Absolute units -> percent
    - round_percent(value): Round to 2 decimals
    - clamp(value, lo, hi): Bound a value

Key Classes:
    - PercentRect: Page-relative rectangle (percent)
    - AbsoluteRect: Rectangle in a concrete medium (points, pixels)

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.fields.Field
    - core.models.templates.TemplateDraft
    - editor.session
    - composer.layout.planner
"""

from __future__ import annotations

from dataclasses import dataclass

PERCENT_MAX = 100.0
PERCENT_DECIMALS = 2


def to_absolute(percent: float, dimension: float) -> float:
    """
    Convert a page percentage to absolute units.

    Args:
        percent: Value in percent of the page dimension
        dimension: Page dimension in the target medium

    Returns:
        (percent / 100) * dimension

    Example:
        >>> to_absolute(50, 210)
        105.0
    """
    return (percent / PERCENT_MAX) * dimension


def to_percent(absolute: float, dimension: float) -> float:
    """
    Convert absolute units back to a page percentage.

    Raises:
        ValueError: If dimension is not positive
    """
    if dimension <= 0:
        raise ValueError(f"dimension must be positive: {dimension}")
    return absolute / dimension * PERCENT_MAX


def round_percent(value: float) -> float:
    """Round a percentage to 2 decimal digits."""
    return round(value, PERCENT_DECIMALS)


def clamp(value: float, lo: float, hi: float) -> float:
    """Bound value to [lo, hi]. hi wins when hi < lo."""
    return max(lo, min(hi, value))


@dataclass(frozen=True, slots=True)
class AbsoluteRect:
    """
    Rectangle in a concrete medium, top-down.

    Attributes:
        x: Left edge
        y: Top edge (distance from the page top)
        width: Width
        height: Height
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        """Centre point (x, y)."""
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True, slots=True)
class PercentRect:
    """
    Page-relative rectangle in percent.

    Invariants (after clamped()):
        - 0 <= width <= 100, 0 <= height <= 100
        - 0 <= x <= 100 - width
        - 0 <= y <= 100 - height

    Example:
        >>> PercentRect(95, 10, 10, 5).clamped()
        PercentRect(x=90.0, y=10.0, width=10.0, height=5.0)
    """

    x: float
    y: float
    width: float
    height: float

    # ─────────────────────────────────────────────────────────────────────────
    # Constraints
    # ─────────────────────────────────────────────────────────────────────────

    def clamped(self) -> PercentRect:
        """Return a copy that fits entirely within the page."""
        width = round_percent(clamp(self.width, 0.0, PERCENT_MAX))
        height = round_percent(clamp(self.height, 0.0, PERCENT_MAX))
        return PercentRect(
            x=round_percent(clamp(self.x, 0.0, PERCENT_MAX - width)),
            y=round_percent(clamp(self.y, 0.0, PERCENT_MAX - height)),
            width=width,
            height=height,
        )

    def fits_page(self, tolerance: float = 1e-9) -> bool:
        """Check the in-page invariant."""
        return (
            self.x >= -tolerance
            and self.y >= -tolerance
            and self.x + self.width <= PERCENT_MAX + tolerance
            and self.y + self.height <= PERCENT_MAX + tolerance
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────────────

    def to_absolute(self, page_width: float, page_height: float) -> AbsoluteRect:
        """
        Scale to a medium of the given page size.

        Args:
            page_width: Page width in target units
            page_height: Page height in target units

        Returns:
            AbsoluteRect in the same units, origin top-left
        """
        return AbsoluteRect(
            x=to_absolute(self.x, page_width),
            y=to_absolute(self.y, page_height),
            width=to_absolute(self.width, page_width),
            height=to_absolute(self.height, page_height),
        )
