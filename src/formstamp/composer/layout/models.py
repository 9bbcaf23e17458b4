"""
Module: composer.layout.models

Purpose:
    Draw operations produced by the planner and consumed by the PDF
    renderer. Immutable dataclasses; all coordinates are absolute points
    measured from the page top-left.

Key Classes:
    - BackgroundOp: Full-bleed page background
    - ImageOp: Embedded image in a field rectangle
    - MarkOp: Bold mark centred in a field rectangle
    - TextOp: Styled, auto-fitted text line
    - PagePlan: Ordered ops for one page
    - RenderedDocument: All pages plus the output name

Used By:
    - composer.layout.planner: Creates ops
    - composer.output.renderer: Paints ops
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from formstamp.core.models.fields import Alignment
from formstamp.core.models.geometry import AbsoluteRect
from formstamp.core.utils.payloads import ImagePayload


@dataclass(frozen=True)
class BackgroundOp:
    """Page background scaled to exactly fill the page."""
    payload: ImagePayload
    format: str


@dataclass(frozen=True)
class ImageOp:
    """
    Image painted into a field rectangle.

    Attributes:
        field_key: Source field key (for diagnostics)
        rect: Target rectangle in points
        payload: Embedded image payload
        format: Sniffed format (PNG, WEBP, JPEG)
    """
    field_key: str
    rect: AbsoluteRect
    payload: ImagePayload
    format: str


@dataclass(frozen=True)
class MarkOp:
    """
    Mark glyph centred in a field rectangle.

    Attributes:
        field_key: Source field key
        rect: Field rectangle in points
        text: Glyph to draw
        font_name: Resolved PDF font (bold variant)
        font_size: Size in points
        baseline_y: Baseline from the page top that centres the glyph vertically
    """
    field_key: str
    rect: AbsoluteRect
    text: str
    font_name: str
    font_size: float
    baseline_y: float

    @property
    def center(self) -> tuple[float, float]:
        return self.rect.center


@dataclass(frozen=True)
class TextOp:
    """
    Single line of text anchored at a field.

    Attributes:
        field_key: Source field key
        rect: Field rectangle in points
        text: Final text (after date formatting)
        font_name: Resolved PDF font for family + style
        font_size: Auto-fitted size in points
        color: (r, g, b) 0-255
        align: Alignment within the rectangle width
        anchor_x: X of the anchor point for the alignment
        baseline_y: Baseline distance from the page top
    """
    field_key: str
    rect: AbsoluteRect
    text: str
    font_name: str
    font_size: float
    color: tuple[int, int, int]
    align: Alignment
    anchor_x: float
    baseline_y: float


DrawOp = Union[BackgroundOp, ImageOp, MarkOp, TextOp]


@dataclass(frozen=True)
class PagePlan:
    """
    Ordered draw operations for a single page.

    Attributes:
        index: Page number (0-indexed)
        width: Page width in points
        height: Page height in points
        ops: Ops in paint order (background, images, then the rest)
    """
    index: int
    width: float
    height: float
    ops: tuple[DrawOp, ...]

    @property
    def op_count(self) -> int:
        return len(self.ops)

    @property
    def background(self) -> BackgroundOp | None:
        for op in self.ops:
            if isinstance(op, BackgroundOp):
                return op
        return None

    def field_ops(self) -> tuple[DrawOp, ...]:
        """Ops other than the background."""
        return tuple(op for op in self.ops if not isinstance(op, BackgroundOp))


@dataclass(frozen=True)
class RenderedDocument:
    """
    Planned document (one PagePlan per template page).

    Attributes:
        template_id: Source template id
        filename: Output artifact name
        pages: Page plans in physical order
    """
    template_id: str
    filename: str
    pages: tuple[PagePlan, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)
