"""
Module: composer.layout.fonts

Purpose:
    Font resolution and auto-fit sizing using the base-14 PDF fonts that
    ship with reportlab.

Key Functions:
    - resolve_font(family, bold, italic): PDF font name for one of four
      style variants
    - text_width(text, font_name, size): Rendered width in points
    - fit_font_size(text, font_name, max_width, start_size): Largest size
      <= start_size that fits max_width, floored at MIN_FONT_SIZE

Dependencies:
    - reportlab.pdfbase.pdfmetrics: Glyph metrics
"""

from __future__ import annotations

from reportlab.pdfbase.pdfmetrics import getAscent, stringWidth

from formstamp.core.models.fields import FontFamily

from .config import FONT_SIZE_STEP, MIN_FONT_SIZE

# (regular, bold, italic, bold-italic)
_FONT_VARIANTS: dict[FontFamily, tuple[str, str, str, str]] = {
    FontFamily.HELVETICA: ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    FontFamily.TIMES: ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    FontFamily.COURIER: ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}


def resolve_font(family: FontFamily | str, bold: bool = False, italic: bool = False) -> str:
    """
    PDF font name for a family and style.

    Example:
        >>> resolve_font(FontFamily.TIMES, bold=True, italic=True)
        'Times-BoldItalic'
    """
    regular, bold_name, italic_name, bold_italic = _FONT_VARIANTS[FontFamily(family)]
    if bold and italic:
        return bold_italic
    if bold:
        return bold_name
    if italic:
        return italic_name
    return regular


def text_width(text: str, font_name: str, size: float) -> float:
    """Rendered width of text in points."""
    return stringWidth(text, font_name, size)


def ascent(font_name: str, size: float) -> float:
    """Distance from baseline to the top of the tallest glyph, in points."""
    return getAscent(font_name, size)


def fit_font_size(
    text: str,
    font_name: str,
    max_width: float,
    start_size: float,
    *,
    min_size: float = MIN_FONT_SIZE,
    step: float = FONT_SIZE_STEP,
) -> float:
    """
    Largest font size that fits the width.

    Starts at start_size and decreases in step increments while the text
    is wider than max_width and the size is above min_size. Never grows
    beyond start_size. Only width is considered.

    Args:
        text: Text to measure
        font_name: PDF font name
        max_width: Available width in points
        start_size: Configured size (upper bound)
        min_size: Floor
        step: Decrement

    Returns:
        Fitted size in points

    Example:
        >>> fit_font_size("JOHN SMITH", "Helvetica", 500, 12)
        12
    """
    size = start_size
    while text_width(text, font_name, size) > max_width and size > min_size:
        size = max(size - step, min_size)
    return size
