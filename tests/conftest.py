"""Pytest fixtures for pixelator tests."""
from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from pixelator import Config, PixelBuffer

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def default_config() -> Config:
    """Return a default Config instance."""
    return Config()


@pytest.fixture
def red_corner_buffer() -> PixelBuffer:
    """4x4 blue image whose pixel (0, 0) is red."""
    arr = np.zeros((4, 4, 4), dtype=np.uint8)
    arr[:, :] = BLUE
    arr[0, 0] = RED
    return PixelBuffer(arr)


@pytest.fixture
def gradient_buffer() -> PixelBuffer:
    """7x5 image where every pixel has a distinct color.

    Red encodes x, green encodes y, so the source pixel behind any output
    color can be read back.
    """
    arr = np.zeros((5, 7, 4), dtype=np.uint8)
    for y in range(5):
        for x in range(7):
            arr[y, x] = (x * 30, y * 40, 100, 255)
    return PixelBuffer(arr)


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a 64x48 test image with 8x8 cells of alternating colors."""
    img = Image.new("RGBA", (64, 48), (255, 255, 255, 255))
    arr = np.array(img)

    cell_size = 8
    colors = [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 0, 255),  # Yellow
    ]

    for y in range(6):
        for x in range(8):
            color_idx = (x + y) % len(colors)
            y_start, y_end = y * cell_size, (y + 1) * cell_size
            x_start, x_end = x * cell_size, (x + 1) * cell_size
            arr[y_start:y_end, x_start:x_end] = colors[color_idx]

    return Image.fromarray(arr, "RGBA")


@pytest.fixture
def sample_image_bytes(sample_image: Image.Image) -> bytes:
    """Return sample image as PNG bytes."""
    buf = io.BytesIO()
    sample_image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def sample_png(tmp_path, sample_image_bytes: bytes):
    """Write the sample image to a temporary PNG file."""
    path = tmp_path / "input.png"
    path.write_bytes(sample_image_bytes)
    return path


@pytest.fixture
def transparent_image() -> Image.Image:
    """Create a 16x16 image with a transparent border."""
    img = Image.new("RGBA", (16, 16), (0, 0, 0, 0))
    arr = np.array(img)
    arr[4:12, 4:12] = (255, 128, 64, 255)
    return Image.fromarray(arr, "RGBA")


@pytest.fixture
def png_bytes():
    """Return a helper that encodes a Pillow image as PNG bytes."""

    def encode(img: Image.Image) -> bytes:
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    return encode
