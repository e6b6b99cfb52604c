"""Decoding of uploaded images into pipeline payloads."""

from __future__ import annotations

import base64
import binascii
import io
import logging

from PIL import Image, UnidentifiedImageError

from craftstudio.models.images import ImagePayload

logger = logging.getLogger(__name__)


def sniff_mime(data: bytes, default: str = "image/png") -> str:
    """Detect the MIME type of raw image bytes with Pillow."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("Could not identify image bytes: %s", e)
        return default
    return Image.MIME.get(fmt or "", default)


def decode_image(value: str) -> ImagePayload:
    """Accept a data URL or bare base64 string; raise ValueError if neither decodes."""
    value = value.strip()
    if value.startswith("data:"):
        return ImagePayload.from_data_url(value)
    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image: {e}") from e
    return ImagePayload(data=data, mime_type=sniff_mime(data))
