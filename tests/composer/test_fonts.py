"""
Unit Tests for Font Resolution and Auto-Fit
"""

import pytest
from reportlab.pdfbase.pdfmetrics import stringWidth

from formstamp.composer.layout.fonts import fit_font_size, resolve_font
from formstamp.core.models.fields import FontFamily

LONG_TEXT = "ABDULLAH MOHAMMED AL-SABAH INTERNATIONAL RECRUITMENT SERVICES"


class TestResolveFont:
    """Tests for resolve_font()."""

    @pytest.mark.parametrize("family,bold,italic,expected", [
        (FontFamily.HELVETICA, False, False, "Helvetica"),
        (FontFamily.HELVETICA, True, False, "Helvetica-Bold"),
        (FontFamily.HELVETICA, False, True, "Helvetica-Oblique"),
        (FontFamily.HELVETICA, True, True, "Helvetica-BoldOblique"),
        (FontFamily.TIMES, False, False, "Times-Roman"),
        (FontFamily.TIMES, True, True, "Times-BoldItalic"),
        (FontFamily.COURIER, False, True, "Courier-Oblique"),
        ("Courier", True, False, "Courier-Bold"),
    ])
    def test_resolve_font_when_style_then_variant(self, family, bold, italic, expected):
        assert resolve_font(family, bold, italic) == expected


class TestFitFontSize:
    """Tests for fit_font_size()."""

    def test_fit_when_text_fits_then_configured_size(self):
        assert fit_font_size("JOHN SMITH", "Helvetica", 500, 12) == 12

    def test_fit_when_too_wide_then_shrinks_until_fits(self):
        # Arrange
        max_width = stringWidth(LONG_TEXT, "Helvetica", 12) / 2

        # Act
        size = fit_font_size(LONG_TEXT, "Helvetica", max_width, 12)

        # Assert
        assert size < 12
        assert stringWidth(LONG_TEXT, "Helvetica", size) <= max_width
        # One step larger would not fit
        assert stringWidth(LONG_TEXT, "Helvetica", size + 0.5) > max_width

    def test_fit_when_far_too_wide_then_floor_of_four(self):
        assert fit_font_size(LONG_TEXT, "Helvetica", 10, 12) == 4

    def test_fit_when_configured_below_floor_then_unchanged(self):
        assert fit_font_size(LONG_TEXT, "Helvetica", 10, 3) == 3

    def test_fit_when_steps_overshoot_floor_then_clamped_to_floor(self):
        assert fit_font_size(LONG_TEXT, "Helvetica", 10, 4.3) == 4

    def test_fit_when_widths_grow_then_size_never_decreases(self):
        """Fitted size is monotonic in the available width and capped at the configured size."""
        previous = 0.0
        for width in range(10, 800, 15):
            size = fit_font_size(LONG_TEXT, "Times-Bold", width, 14)
            assert 4 <= size <= 14
            assert size >= previous
            previous = size
