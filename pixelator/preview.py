"""Side-by-side preview of the original and pixelated images."""
from __future__ import annotations

from typing import Tuple

from PIL import Image, ImageDraw

from .buffer import PixelBuffer
from .config import PixelatorError
from .engine import iter_blocks

PREVIEW_BACKGROUND = (40, 40, 40, 255)


def draw_block_grid(
    img: Image.Image,
    block_size: int,
    scale: int,
    color: Tuple[int, int, int, int],
) -> Image.Image:
    """Draw block boundaries on a scaled image.

    Args:
        img: Scaled image to draw on (not modified).
        block_size: Block size in original pixel coordinates.
        scale: Scale factor applied to the image.
        color: RGBA color for grid lines.

    Returns:
        Copy of the image with the grid overlay.
    """
    result = img.copy()
    draw = ImageDraw.Draw(result, "RGBA")
    width, height = result.size

    orig_w = width // scale
    orig_h = height // scale
    xs = set()
    ys = set()
    for block in iter_blocks(orig_w, orig_h, block_size):
        xs.add(block.x)
        ys.add(block.y)

    for col in sorted(xs):
        x = col * scale
        if 0 < x < width:
            draw.line([(x, 0), (x, height - 1)], fill=color, width=1)

    for row in sorted(ys):
        y = row * scale
        if 0 < y < height:
            draw.line([(0, y), (width - 1, y)], fill=color, width=1)

    return result


def render_side_by_side(
    original: PixelBuffer,
    result: PixelBuffer,
    block_size: int,
    scale: int = 1,
    min_size: int = 400,
    max_side: int = 4096,
    gap: int = 4,
    grid_color: Tuple[int, int, int, int] = (255, 0, 0, 180),
) -> Image.Image:
    """Compose original (with block grid) and result next to each other.

    Small images are enlarged so the blocks stay visible, but the long side
    never exceeds max_side (unless the image is already larger).

    Raises:
        PixelatorError: If either buffer is empty.
    """
    if original.is_empty() or result.is_empty():
        raise PixelatorError("Cannot preview an empty image")
    width, height = original.size

    min_dimension = min(width, height)
    if min_dimension * scale < min_size:
        scale = max(scale, min_size // min_dimension + 1)
    scale = max(1, min(scale, max_side // max(width, height)))

    scaled_w, scaled_h = width * scale, height * scale
    scaled_input = original.to_image().resize(
        (scaled_w, scaled_h), resample=Image.NEAREST
    )
    scaled_output = result.to_image().resize(
        (scaled_w, scaled_h), resample=Image.NEAREST
    )
    input_with_grid = draw_block_grid(scaled_input, block_size, scale, grid_color)

    preview_img = Image.new("RGBA", (scaled_w * 2 + gap, scaled_h), PREVIEW_BACKGROUND)
    preview_img.paste(input_with_grid, (0, 0))
    preview_img.paste(scaled_output, (scaled_w + gap, 0))
    return preview_img


def show_preview(original: PixelBuffer, result: PixelBuffer, block_size: int) -> None:
    render_side_by_side(original, result, block_size).show(title="Pixelator Preview")
