"""
Module: payloads

Purpose:
    Self-describing embedded image payloads. A payload is either a data URL
    string ("data:image/png;base64,...") or raw encoded image bytes. The
    format is identified from a short prefix only; no other declaration is
    trusted.

Key Functions:
    - is_image_payload(value): Whether a value is an embedded image
    - sniff_format(payload): "PNG", "WEBP" or "JPEG" (default)
    - payload_bytes(payload): Raw encoded bytes
    - to_data_url(data): Wrap raw bytes in a data URL

Used By:
    - composer.images: Decoding for rendering
    - core.utils.serialization: Storing byte pages as JSON
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Union

ImagePayload = Union[str, bytes]

DATA_URL_PREFIX = "data:image"

_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
_RIFF_MAGIC = b"RIFF"
_WEBP_MAGIC = b"WEBP"

_MIME_TYPES = {"PNG": "image/png", "WEBP": "image/webp", "JPEG": "image/jpeg"}


def is_image_payload(value: Any) -> bool:
    """True for data-URL strings and non-empty bytes."""
    if isinstance(value, str):
        return value.startswith(DATA_URL_PREFIX)
    return isinstance(value, (bytes, bytearray)) and len(value) > 0


def sniff_format(payload: ImagePayload) -> str:
    """
    Identify the image format from its prefix.

    Data URLs are matched on their media type, raw bytes on their magic
    number. Anything unrecognised is treated as JPEG.

    Example:
        >>> sniff_format("data:image/png;base64,iVBOR...")
        'PNG'
        >>> sniff_format("data:image/jpeg;base64,/9j/...")
        'JPEG'
    """
    if isinstance(payload, str):
        if payload.startswith("data:image/png"):
            return "PNG"
        if payload.startswith("data:image/webp"):
            return "WEBP"
        return "JPEG"
    head = bytes(payload[:12])
    if head.startswith(_PNG_MAGIC):
        return "PNG"
    if head.startswith(_RIFF_MAGIC) and head[8:12] == _WEBP_MAGIC:
        return "WEBP"
    return "JPEG"


def payload_bytes(payload: ImagePayload) -> bytes:
    """
    Raw encoded image bytes of a payload.

    Raises:
        ValueError: If a data URL has no base64 body or cannot be decoded
    """
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if "," not in payload:
        raise ValueError("data URL has no payload")
    header, encoded = payload.split(",", 1)
    if ";base64" not in header:
        raise ValueError(f"Unsupported data URL encoding: {header[:40]}")
    try:
        return base64.b64decode(encoded, validate=False)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def to_data_url(data: bytes) -> str:
    """Wrap raw image bytes in a data URL carrying the sniffed media type."""
    mime = _MIME_TYPES[sniff_format(data)]
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
