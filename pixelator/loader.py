"""Decoding images into pixel buffers and encoding them back out."""
from __future__ import annotations

import io
import logging
import mimetypes
import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from PIL import Image, UnidentifiedImageError

from .buffer import PixelBuffer
from .config import DecodeFailureError, PixelatorError, validate_image_dimensions

logger = logging.getLogger("pixelator")

DEFAULT_DOWNLOAD_NAME = "pixelated-image.png"

ImageSource = Union[bytes, str, os.PathLike, BinaryIO]

# Formats that cannot carry an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP"}


def is_image_file(name: Union[str, os.PathLike]) -> bool:
    """Return True if the file name maps to an ``image/*`` MIME type."""
    mime, _ = mimetypes.guess_type(str(name))
    return mime is not None and mime.startswith("image/")


def _open_rgba(fp: Union[str, os.PathLike, BinaryIO]) -> PixelBuffer:
    try:
        with Image.open(fp) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as exc:
        raise DecodeFailureError(f"Could not decode image: {exc}") from exc

    width, height = rgba.size
    validate_image_dimensions(width, height)
    logger.debug(f"Decoded {width}x{height} image (source mode {img.mode})")
    return PixelBuffer.from_image(rgba)


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, GIF, ...) into RGBA.

    Raises:
        DecodeFailureError: If Pillow cannot decode the data.
        EmptyInputError: If the decoded image has zero area.
    """
    if not data:
        raise DecodeFailureError("No image data")
    return _open_rgba(io.BytesIO(data))


def load_image(source: ImageSource) -> PixelBuffer:
    """Load an image from bytes, a path or a binary file object."""
    if isinstance(source, (bytes, bytearray)):
        return decode_image(bytes(source))
    if isinstance(source, (str, os.PathLike)) and not Path(source).exists():
        raise DecodeFailureError(f"Input file not found: {source}")
    return _open_rgba(source)


def resolve_format(path: Union[str, os.PathLike, None], fmt: Optional[str] = None) -> str:
    """Pick an output format from an explicit name or the file extension."""
    if fmt:
        name = fmt.upper()
    elif path:
        ext = os.path.splitext(str(path))[1].lower()
        name = Image.registered_extensions().get(ext, "PNG")
    else:
        name = "PNG"
    if name == "JPG":
        name = "JPEG"
    if name not in Image.SAVE:
        # Pillow registers save handlers lazily
        Image.init()
    if name not in Image.SAVE:
        raise PixelatorError(f"Unsupported output format: {fmt or name}")
    return name


def encode_image(buffer: PixelBuffer, fmt: str = "PNG") -> bytes:
    """Encode a pixel buffer into image bytes.

    Formats without alpha support (JPEG, BMP) are written as RGB.
    """
    name = resolve_format(None, fmt)
    img = buffer.to_image()
    if name in _OPAQUE_FORMATS:
        img = img.convert("RGB")
    out = io.BytesIO()
    img.save(out, format=name)
    return out.getvalue()


def save_image(
    buffer: PixelBuffer,
    path: Union[str, os.PathLike] = DEFAULT_DOWNLOAD_NAME,
    fmt: Optional[str] = None,
) -> str:
    """Encode and write a buffer; returns the format used."""
    name = resolve_format(path, fmt)
    data = encode_image(buffer, name)
    with open(path, "wb") as f:
        f.write(data)
    logger.debug(f"Saved {buffer.width}x{buffer.height} {name} to {path}")
    return name
