"""
Unit Tests for Image Payload Decoding
"""

import base64
import io

import pytest
from PIL import Image

from formstamp.composer.images import ImageDecodeError, decode_payload


def _encode(img: Image.Image, fmt: str) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


class TestDecodePayload:
    """Tests for decode_payload()."""

    def test_decode_when_png_data_url_then_rgb_image(self, png_data_url):
        img = decode_payload(png_data_url)
        assert img.mode == "RGB"
        assert img.size == (40, 56)

    def test_decode_when_raw_bytes_then_image(self, png_bytes):
        assert decode_payload(png_bytes).size == (40, 56)

    def test_decode_when_palette_image_then_converted_to_rgb(self):
        data = _encode(Image.new("P", (8, 8)), "PNG")
        assert decode_payload(data).mode == "RGB"

    def test_decode_when_alpha_then_rgba_kept(self):
        data = _encode(Image.new("RGBA", (8, 8), (255, 0, 0, 128)), "PNG")
        assert decode_payload(data).mode == "RGBA"

    def test_decode_when_grey_with_alpha_then_rgba(self):
        data = _encode(Image.new("LA", (8, 8)), "PNG")
        assert decode_payload(data).mode == "RGBA"

    def test_decode_when_jpeg_then_image(self):
        data = _encode(Image.new("RGB", (8, 8), "blue"), "JPEG")
        assert decode_payload(data).mode == "RGB"

    @pytest.mark.parametrize("payload", [b"not an image", "data:image/png;base64", "data:image/png;base64,AAAA"])
    def test_decode_when_unreadable_then_raises_decode_error(self, payload):
        with pytest.raises(ImageDecodeError):
            decode_payload(payload)

    def test_decode_when_format_given_then_only_that_format_tried(self, png_bytes):
        with pytest.raises(ImageDecodeError, match="JPEG"):
            decode_payload(png_bytes, "JPEG")

    def test_decode_when_gif_data_url_then_raises_as_jpeg(self):
        data = _encode(Image.new("RGB", (8, 8), "green"), "GIF")
        gif_url = "data:image/gif;base64," + base64.b64encode(data).decode("ascii")
        with pytest.raises(ImageDecodeError, match="JPEG"):
            decode_payload(gif_url)
