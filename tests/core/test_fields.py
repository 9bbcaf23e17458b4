"""
Unit Tests for the Field Model

Tests construction invariants, clamped geometry copies and the wire
format.
"""

import pytest

from formstamp.core.models.fields import (
    Alignment,
    Field,
    FieldCategory,
    FieldType,
    FontFamily,
    default_footprint,
    hex_to_rgb,
)


class TestField:
    """Tests for Field dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_valid_then_creates_field_with_defaults(self):
        f = Field("f1", "fullName", "Full Name", 10, 10, 50, 6)
        assert f.page == 1
        assert f.type is FieldType.TEXT
        assert f.font_size == 12.0
        assert f.font_family is FontFamily.HELVETICA
        assert f.align is Alignment.LEFT
        assert f.color == "#000000"

    def test_init_when_enum_strings_then_coerced(self):
        f = Field("f1", "photoFace", "Face", 0, 0, 30, 40, type="image", align="center", category="passport")
        assert f.type is FieldType.IMAGE
        assert f.align is Alignment.CENTER
        assert f.category is FieldCategory.PASSPORT

    def test_init_when_empty_key_then_raises_error(self):
        with pytest.raises(ValueError, match="key must not be empty"):
            Field("f1", "", "x", 0, 0, 10, 10)

    def test_init_when_page_zero_then_raises_error(self):
        with pytest.raises(ValueError, match="page must be >= 1"):
            Field("f1", "k", "k", 0, 0, 10, 10, page=0)

    def test_init_when_overflowing_page_then_raises_error(self):
        with pytest.raises(ValueError, match="does not fit the page"):
            Field("f1", "k", "k", 60, 0, 50, 10)

    def test_init_when_unknown_type_then_raises_error(self):
        with pytest.raises(ValueError):
            Field("f1", "k", "k", 0, 0, 10, 10, type="signature")

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_with_geometry_when_moved_past_edge_then_clamped(self):
        f = Field("f1", "k", "k", 10, 10, 50, 6)
        moved = f.with_geometry(x=200, y=-3)
        assert (moved.x, moved.y) == (50.0, 0.0)

    def test_with_geometry_when_widened_then_origin_reclamped(self):
        """A wider field is pulled back so it still fits."""
        f = Field("f1", "k", "k", 30, 10, 50, 6)
        widened = f.with_geometry(width=80)
        assert widened.width == 80.0
        assert widened.x == 20.0
        assert widened.rect.fits_page()

    def test_with_geometry_when_called_then_original_unchanged(self):
        f = Field("f1", "k", "k", 10, 10, 50, 6)
        f.with_geometry(x=40)
        assert f.x == 10

    def test_rgb_when_hex_color_then_returns_triple(self):
        f = Field("f1", "k", "k", 0, 0, 10, 10, color="#ff8000")
        assert f.rgb == (255, 128, 0)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_to_dict_when_called_then_uses_wire_keys(self):
        f = Field("f1", "k", "Label", 0, 0, 10, 10, font_size=9, bold=True)
        data = f.to_dict()
        assert data["fontSize"] == 9
        assert data["fontFamily"] == "Helvetica"
        assert data["type"] == "text"
        assert data["bold"] is True

    def test_from_dict_when_minimal_then_defaults_applied(self):
        f = Field.from_dict({"id": "a", "key": "dob", "x": 5, "y": 5, "width": 20, "height": 4})
        assert f.label == "dob"
        assert f.page == 1
        assert f.type is FieldType.TEXT
        assert f.font_size == 12.0

    def test_from_dict_when_stored_geometry_overflows_then_clamped(self):
        f = Field.from_dict({"id": "a", "key": "k", "x": 98, "y": 97, "width": 10, "height": 5})
        assert (f.x, f.y) == (90.0, 95.0)


class TestHelpers:
    """Tests for module-level helpers."""

    @pytest.mark.parametrize("field_type,expected", [
        (FieldType.CHECKMARK, (4.0, 4.0)),
        (FieldType.BOOLEAN, (4.0, 4.0)),
        (FieldType.IMAGE, (30.0, 40.0)),
        (FieldType.TEXT, (40.0, 6.0)),
    ])
    def test_default_footprint_when_type_then_returns_seed_size(self, field_type, expected):
        assert default_footprint(field_type) == expected

    def test_hex_to_rgb_when_malformed_then_black(self):
        assert hex_to_rgb("red") == (0, 0, 0)
        assert hex_to_rgb("") == (0, 0, 0)

    def test_hex_to_rgb_when_no_hash_then_parsed(self):
        assert hex_to_rgb("0000FF") == (0, 0, 255)
