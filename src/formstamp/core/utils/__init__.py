"""
Utils Package

Serialization and image payload helpers.
"""

from .payloads import is_image_payload, sniff_format, payload_bytes, to_data_url
from .serialization import (
    serialize_template,
    deserialize_template,
    load_template_json,
    save_template_json,
)

__all__ = [
    "is_image_payload",
    "sniff_format",
    "payload_bytes",
    "to_data_url",
    "serialize_template",
    "deserialize_template",
    "load_template_json",
    "save_template_json",
]
