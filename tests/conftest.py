import base64
import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import formstamp
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from formstamp.core.models import DataRecord, Field, FieldType, Template  # noqa: E402


def _png_bytes(size=(40, 56), color="white") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=color).save(buf, format="PNG")
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def png_bytes() -> bytes:
    """Small encoded PNG."""
    return _png_bytes()


@pytest.fixture
def png_data_url(png_bytes) -> str:
    """The same PNG as a data URL."""
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def photo_data_url() -> str:
    """A differently coloured PNG used as a photo."""
    return "data:image/png;base64," + base64.b64encode(_png_bytes((30, 40), "red")).decode("ascii")


@pytest.fixture
def make_field():
    """Factory for fields with test-friendly defaults."""
    counter = {"n": 0}

    def _make(key="fullName", x=10.0, y=10.0, width=50.0, height=6.0, page=1, **kwargs) -> Field:
        counter["n"] += 1
        kwargs.setdefault("id", f"f{counter['n']}")
        kwargs.setdefault("label", key)
        return Field(key=key, x=x, y=y, width=width, height=height, page=page, **kwargs)

    return _make


@pytest.fixture
def make_template(png_data_url):
    """Factory for templates with one background per page."""

    def _make(fields=(), pages=1, name="Kuwait A", country="kuwait", template_id="t1", **kwargs) -> Template:
        return Template(
            id=template_id,
            name=name,
            country=country,
            pages=tuple(png_data_url for _ in range(pages)),
            fields=tuple(fields),
            created_at=kwargs.pop("created_at", "2024-01-01T00:00:00+00:00"),
            **kwargs,
        )

    return _make


@pytest.fixture
def name_template(make_template, make_field) -> Template:
    """Single-page template with one fullName text field."""
    return make_template([make_field("fullName", x=10, y=10, width=50, height=6)])


@pytest.fixture
def john_smith() -> DataRecord:
    return DataRecord.from_dict({"fullName": "JOHN SMITH"})


@pytest.fixture
def image_field(make_field):
    """Factory for image fields."""

    def _make(key="photoFace", **kwargs) -> Field:
        kwargs.setdefault("width", 30.0)
        kwargs.setdefault("height", 40.0)
        return make_field(key, type=FieldType.IMAGE, **kwargs)

    return _make
