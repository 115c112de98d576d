"""Conversions between raw bytes and Pillow images."""

from __future__ import annotations

import io
from enum import Enum

from PIL import Image


class ImageFormat(str, Enum):
    """Pillow format names commonly round-tripped through byte buffers."""

    PNG = "PNG"
    JPEG = "JPEG"
    BMP = "BMP"
    GIF = "GIF"
    TIFF = "TIFF"
    WEBP = "WEBP"
    ICO = "ICO"


def bytes_to_image(data: bytes) -> Image.Image:
    """Decode an encoded image held in memory.

    Raises ``PIL.UnidentifiedImageError`` when the bytes are not an image
    format Pillow recognizes.
    """

    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def image_to_bytes(image: Image.Image, format: ImageFormat | str | None = None) -> bytes:
    """Encode an image with ``format``, or with the format it was decoded from.

    Images built in memory have no native format, so they need one passed
    explicitly.
    """

    target = format or image.format
    if not target:
        raise ValueError("Image has no native format; pass an explicit format.")
    if isinstance(target, ImageFormat):
        target = target.value
    buffer = io.BytesIO()
    image.save(buffer, format=target)
    return buffer.getvalue()


def describe_image(image: Image.Image) -> str:
    width, height = image.size
    return f"{image.format or 'raw'} {width}x{height} {image.mode}"


__all__ = ["ImageFormat", "bytes_to_image", "describe_image", "image_to_bytes"]
