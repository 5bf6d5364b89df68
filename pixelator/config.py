"""Configuration and validation for the pixelator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class PixelatorError(Exception):
    """Base exception for pixelator errors."""

    pass


class InvalidParameterError(PixelatorError):
    """Raised when a block size (or other parameter) is out of range."""

    pass


class DecodeFailureError(PixelatorError):
    """Raised when input data cannot be decoded into a pixel buffer."""

    pass


class EmptyInputError(PixelatorError):
    """Raised for zero-area images."""

    pass


MAX_DIMENSION = 10000


@dataclass
class Config:
    """Configuration for the pixelation pipeline."""

    block_size: int = 10
    min_block_size: int = 2
    max_block_size: int = 50
    input_path: str = ""
    output_path: str = ""
    output_format: Optional[str] = None
    strict: bool = False
    preview: bool = False
    timing: bool = False


def validate_image_dimensions(width: int, height: int) -> None:
    """Validate image dimensions are within acceptable bounds.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        EmptyInputError: If either dimension is zero.
        PixelatorError: If dimensions are too large.
    """
    if width == 0 or height == 0:
        raise EmptyInputError("Image dimensions cannot be zero")
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise PixelatorError(
            f"Image dimensions too large (max {MAX_DIMENSION}x{MAX_DIMENSION})"
        )


def clamp_block_size(value: int, config: Optional[Config] = None) -> int:
    """Clamp a block size into the configured range."""
    config = config or Config()
    return max(config.min_block_size, min(config.max_block_size, int(value)))


def validate_block_size(value: int, config: Optional[Config] = None) -> int:
    """Reject block sizes outside the configured range.

    Raises:
        InvalidParameterError: If value is not an integer within
            [min_block_size, max_block_size].
    """
    config = config or Config()
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"Block size must be an integer, got {value!r}")
    if not config.min_block_size <= value <= config.max_block_size:
        raise InvalidParameterError(
            f"Block size must be between {config.min_block_size} and "
            f"{config.max_block_size}, got {value}"
        )
    return value
