"""
Unit Tests for Value Resolution Rules

Checkmark truth table, absence, date reformatting and photo keys.
"""

import pytest

from formstamp.composer.layout.values import (
    RESERVED_PHOTO_KEYS,
    format_date,
    is_absent,
    is_date_key,
    is_marked,
    resolve_value,
    to_text,
)
from formstamp.core.models.records import DataRecord, PhotoSet


class TestIsMarked:
    """Checkmark truthiness table."""

    @pytest.mark.parametrize("value", [True, "true", "YES", "X"])
    def test_is_marked_when_true_value_then_drawn(self, value):
        assert is_marked(value)

    @pytest.mark.parametrize("value", [False, "no", "", None, 0, 1, "yes", "True", "x", "false"])
    def test_is_marked_when_other_value_then_not_drawn(self, value):
        assert not is_marked(value)


class TestIsAbsent:
    """Tests for is_absent()."""

    @pytest.mark.parametrize("value", [None, False, "", b"", bytearray()])
    def test_is_absent_when_empty_then_true(self, value):
        assert is_absent(value)

    @pytest.mark.parametrize("value", [0, 0.0, "0", "no", True, b"x", [], {}])
    def test_is_absent_when_present_then_false(self, value):
        assert not is_absent(value)


class TestDates:
    """Tests for date keys and DD MON YYYY formatting."""

    @pytest.mark.parametrize("key,expected", [
        ("dob", True),
        ("issueDate", True),
        ("expiryDATE", True),
        ("DOB", False),
        ("fullName", False),
    ])
    def test_is_date_key_when_key_then_matches(self, key, expected):
        assert is_date_key(key) is expected

    @pytest.mark.parametrize("raw,expected", [
        ("2024-03-05", "05 MAR 2024"),
        ("1990-12-31", "31 DEC 1990"),
        ("2024-03-05T10:30:00Z", "05 MAR 2024"),
        ("2024-03-05T10:30:00+03:00", "05 MAR 2024"),
        ("2001/07/09", "09 JUL 2001"),
        ("2001.07.09", "09 JUL 2001"),
    ])
    def test_format_date_when_iso_like_then_reformatted(self, raw, expected):
        assert format_date(raw) == expected

    @pytest.mark.parametrize("raw", ["N/A", "", "31/12/1990", "2024-13-45"])
    def test_format_date_when_unparsable_then_unchanged(self, raw):
        assert format_date(raw) == raw


class TestResolveValue:
    """Tests for resolve_value()."""

    def test_resolve_value_when_photo_key_then_reads_photos(self):
        record = DataRecord(
            values={"photoFace": "ignored"},
            photos=PhotoSet(face="face-payload", full="full-payload", passport="passport-payload"),
        )
        assert resolve_value("photoFace", record) == "face-payload"
        assert resolve_value("photoFull", record) == "full-payload"
        assert resolve_value("photoPassport", record) == "passport-payload"

    def test_resolve_value_when_plain_key_then_reads_values(self):
        assert resolve_value("fullName", DataRecord.from_dict({"fullName": "A"})) == "A"

    def test_resolve_value_when_missing_then_none(self):
        assert resolve_value("fullName", DataRecord()) is None

    def test_reserved_photo_keys_when_checked_then_closed_set(self):
        assert RESERVED_PHOTO_KEYS == {"photoFace", "photoFull", "photoPassport"}


class TestToText:
    """Tests for to_text()."""

    def test_to_text_when_bool_then_lowercase(self):
        assert to_text(True) == "true"

    def test_to_text_when_number_then_str(self):
        assert to_text(0) == "0"
