"""Block pixelation using top-left pixel sampling."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .buffer import PixelBuffer
from .config import EmptyInputError, InvalidParameterError

logger = logging.getLogger("pixelator")


@dataclass(frozen=True)
class Block:
    """A grid block clipped to the image bounds."""

    x: int
    y: int
    width: int
    height: int


def _check_block_size(block_size: int) -> int:
    if isinstance(block_size, bool) or not isinstance(block_size, (int, np.integer)):
        raise InvalidParameterError(
            f"Block size must be an integer, got {block_size!r}"
        )
    if block_size < 1:
        raise InvalidParameterError(f"Block size must be >= 1, got {block_size}")
    return int(block_size)


def iter_blocks(width: int, height: int, block_size: int) -> Iterator[Block]:
    """Yield blocks in row-major order, stepping by block_size from (0, 0).

    Edge blocks are truncated when a dimension is not a multiple of
    block_size.

    Raises:
        InvalidParameterError: If block_size < 1.
    """
    step = _check_block_size(block_size)
    for y in range(0, height, step):
        for x in range(0, width, step):
            yield Block(x, y, min(step, width - x), min(step, height - y))


def count_blocks(width: int, height: int, block_size: int) -> int:
    """Number of blocks (including partial edge blocks) in the grid."""
    step = _check_block_size(block_size)
    return -(-width // step) * -(-height // step)


def pixelate(
    source: PixelBuffer, block_size: int, allow_empty: bool = False
) -> PixelBuffer:
    """Pixelate a buffer by painting each block with its top-left color.

    For every block on the grid, the red, green and blue channels of the
    source pixel at the block's top-left corner are written to all of the
    block's in-bounds pixels. The fill is opaque, so output alpha is 255.
    Interior pixels are never read. The source is left untouched.

    Args:
        source: Input pixel buffer.
        block_size: Block edge length in pixels (>= 1).
        allow_empty: Return an empty buffer for zero-area input instead of
            raising.

    Returns:
        New PixelBuffer with the same dimensions as source.

    Raises:
        InvalidParameterError: If block_size < 1.
        EmptyInputError: If source has zero area and allow_empty is False.
    """
    step = _check_block_size(block_size)
    width, height = source.size

    if source.is_empty():
        if allow_empty:
            return PixelBuffer.empty(width, height)
        raise EmptyInputError("Cannot pixelate a zero-area image")

    # Corner samples, one per block; each output pixel looks up its block
    corners = source.pixels[::step, ::step, :3]
    rows = np.arange(height) // step
    cols = np.arange(width) // step

    out = np.empty((height, width, 4), dtype=np.uint8)
    out[:, :, :3] = corners[rows[:, None], cols[None, :]]
    out[:, :, 3] = 255

    logger.debug(
        f"Pixelated {width}x{height} with block_size={step} "
        f"({corners.shape[1]}x{corners.shape[0]} blocks)"
    )
    return PixelBuffer(out)
