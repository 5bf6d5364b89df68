"""Tests for buffer module."""
from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from pixelator.buffer import PixelBuffer
from pixelator.config import PixelatorError


class TestPixelBuffer:
    """Tests for PixelBuffer construction and access."""

    def test_dimensions(self, gradient_buffer: PixelBuffer) -> None:
        """Should report width, height and pixel count."""
        assert gradient_buffer.width == 7
        assert gradient_buffer.height == 5
        assert gradient_buffer.size == (7, 5)
        assert len(gradient_buffer) == 35

    def test_row_major_index(self, gradient_buffer: PixelBuffer) -> None:
        """Pixel (x, y) should sit at index y * width + x."""
        assert gradient_buffer.index_of(0, 0) == 0
        assert gradient_buffer.index_of(3, 2) == 2 * 7 + 3
        records = list(gradient_buffer)
        assert records[gradient_buffer.index_of(3, 2)] == gradient_buffer.pixel_at(3, 2)

    def test_pixel_at(self, gradient_buffer: PixelBuffer) -> None:
        """Should return plain int RGBA tuples."""
        assert gradient_buffer.pixel_at(2, 1) == (60, 40, 100, 255)

    def test_out_of_bounds(self, gradient_buffer: PixelBuffer) -> None:
        """Should raise IndexError outside the raster."""
        with pytest.raises(IndexError):
            gradient_buffer.pixel_at(7, 0)
        with pytest.raises(IndexError):
            gradient_buffer.pixel_at(0, -1)

    def test_immutable(self, gradient_buffer: PixelBuffer) -> None:
        """Pixel array should be read-only."""
        with pytest.raises(ValueError):
            gradient_buffer.pixels[0, 0] = (1, 2, 3, 4)

    def test_copies_input(self) -> None:
        """Mutating the source array should not affect the buffer."""
        arr = np.zeros((2, 2, 4), dtype=np.uint8)
        buf = PixelBuffer(arr)
        arr[0, 0] = (9, 9, 9, 9)
        assert buf.pixel_at(0, 0) == (0, 0, 0, 0)

    def test_to_array_is_writable_copy(self, gradient_buffer: PixelBuffer) -> None:
        """to_array should return an independent writable array."""
        arr = gradient_buffer.to_array()
        arr[0, 0] = (1, 1, 1, 1)
        assert gradient_buffer.pixel_at(0, 0) != (1, 1, 1, 1)

    def test_rejects_bad_shape(self) -> None:
        """Should require (H, W, 4) data."""
        with pytest.raises(PixelatorError, match="shape"):
            PixelBuffer(np.zeros((2, 2), dtype=np.uint8))

    def test_from_array_rgb(self) -> None:
        """RGB arrays should gain an opaque alpha channel."""
        arr = np.full((2, 3, 3), 7, dtype=np.uint8)
        buf = PixelBuffer.from_array(arr)
        assert buf.size == (3, 2)
        assert buf.pixel_at(2, 1) == (7, 7, 7, 255)

    def test_from_pixels(self) -> None:
        """Should build from a flat row-major list."""
        pixels = [(i, i, i, 255) for i in range(6)]
        buf = PixelBuffer.from_pixels(3, 2, pixels)
        assert buf.pixel_at(0, 1) == (3, 3, 3, 255)
        assert list(buf) == pixels

    def test_from_pixels_wrong_count(self) -> None:
        """Should reject a pixel count that does not match the size."""
        with pytest.raises(PixelatorError, match="Expected 6 pixels"):
            PixelBuffer.from_pixels(3, 2, [(0, 0, 0, 0)] * 5)

    def test_from_pixels_wrong_channel_count(self) -> None:
        """Records that are not RGBA should raise PixelatorError."""
        with pytest.raises(PixelatorError, match="4 channels"):
            PixelBuffer.from_pixels(3, 2, [(0, 0, 0)] * 6)

    def test_from_pixels_empty(self) -> None:
        """An empty record list should build a zero-area buffer."""
        assert PixelBuffer.from_pixels(0, 3, []).is_empty()

    def test_image_round_trip(self) -> None:
        """Should convert to and from Pillow images."""
        img = Image.new("RGB", (5, 3), (10, 20, 30))
        buf = PixelBuffer.from_image(img)
        assert buf.pixel_at(4, 2) == (10, 20, 30, 255)
        out = buf.to_image()
        assert out.mode == "RGBA"
        assert out.size == (5, 3)

    def test_empty(self) -> None:
        """Zero-area buffers should be constructible but not convertible."""
        buf = PixelBuffer.empty(0, 4)
        assert buf.is_empty()
        assert len(buf) == 0
        with pytest.raises(PixelatorError, match="empty"):
            buf.to_image()

    def test_empty_requires_zero_dimension(self) -> None:
        """empty() should refuse a non-zero area."""
        with pytest.raises(PixelatorError):
            PixelBuffer.empty(2, 2)

    def test_equality(self, gradient_buffer: PixelBuffer) -> None:
        """Buffers compare by size and pixel data."""
        same = PixelBuffer(gradient_buffer.to_array())
        assert same == gradient_buffer
        other = gradient_buffer.to_array()
        other[0, 0, 0] ^= 1
        assert PixelBuffer(other) != gradient_buffer
