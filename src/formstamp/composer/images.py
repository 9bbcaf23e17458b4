"""
Module: composer.images

Purpose:
    Decode embedded image payloads into PIL images for painting.

Key Functions:
    - decode_payload(): Payload -> PIL Image (RGB/RGBA)
    - ImageDecodeError: Raised for payloads PIL cannot read

Dependencies:
    - PIL: Decoding (PNG, JPEG, WEBP)
    - core.utils.payloads: Byte extraction

Used By:
    - composer.output.renderer
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from formstamp.core.utils.payloads import ImagePayload, payload_bytes, sniff_format

logger = logging.getLogger(__name__)


class ImageDecodeError(Exception):
    """Payload could not be decoded as an image."""
    pass


def decode_payload(payload: ImagePayload, fmt: Optional[str] = None) -> Image.Image:
    """
    Decode an embedded image as its sniffed format.

    Only the format named by the payload prefix is tried, so a payload
    whose content does not match its prefix fails to decode. Palette and
    CMYK images are converted to RGB; transparency is kept as RGBA.

    Args:
        payload: Data URL or raw image bytes
        fmt: PNG, WEBP or JPEG (default: sniffed from the payload)

    Returns:
        Loaded PIL Image

    Raises:
        ImageDecodeError: If the payload is not a readable image
    """
    fmt = fmt or sniff_format(payload)
    try:
        data = payload_bytes(payload)
        img = Image.open(io.BytesIO(data), formats=[fmt])
        img.load()
    except (ValueError, OSError, UnidentifiedImageError) as e:
        raise ImageDecodeError(f"Cannot decode {fmt} payload: {e}") from e

    if img.mode not in ("RGB", "RGBA"):
        has_alpha = img.mode in ("LA", "PA") or "transparency" in img.info
        img = img.convert("RGBA" if has_alpha else "RGB")
    return img
