"""
Module: composer.layout.config

Purpose:
    Configuration for document composition.
    Defines output page size, auto-fit limits and bulk pacing.

Key Classes:
    - RenderConfig: Immutable composition configuration

Dependencies:
    - reportlab.lib.pagesizes: A4 in points
    - reportlab.lib.units: mm

Used By:
    - composer.layout.planner: Geometry and auto-fit
    - composer.controller: Bulk delay
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

# A4 in PDF points (1/72 inch)
DEFAULT_PAGE_WIDTH_PT, DEFAULT_PAGE_HEIGHT_PT = A4

MIN_FONT_SIZE = 4.0
FONT_SIZE_STEP = 0.5
DEFAULT_BULK_DELAY_SECONDS = 0.5


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for composing documents (immutable).

    Attributes:
        page_width: Output page width in points
        page_height: Output page height in points
        min_font_size: Auto-fit floor in points
        font_size_step: Auto-fit decrement in points
        fallback_fit_width: Fit width for fields with zero width (points)
        mark_text: Glyph drawn for true checkmark/boolean fields
        bulk_delay_seconds: Pause between successive bulk deliveries

    Example:
        >>> config = RenderConfig()
        >>> round(config.page_width)
        595
    """

    page_width: float = DEFAULT_PAGE_WIDTH_PT
    page_height: float = DEFAULT_PAGE_HEIGHT_PT

    # Auto-fit
    min_font_size: float = MIN_FONT_SIZE
    font_size_step: float = FONT_SIZE_STEP
    fallback_fit_width: float = 50 * mm

    mark_text: str = "X"

    # Bulk generation pacing for the download channel
    bulk_delay_seconds: float = DEFAULT_BULK_DELAY_SECONDS

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.min_font_size <= 0:
            raise ValueError(f"min_font_size must be positive: {self.min_font_size}")
        if self.font_size_step <= 0:
            raise ValueError(f"font_size_step must be positive: {self.font_size_step}")
        if self.fallback_fit_width <= 0:
            raise ValueError(f"fallback_fit_width must be positive: {self.fallback_fit_width}")
        if self.bulk_delay_seconds < 0:
            raise ValueError(f"bulk_delay_seconds must be non-negative: {self.bulk_delay_seconds}")
