"""Immutable RGBA pixel buffer backed by a NumPy array."""
from __future__ import annotations

from typing import Iterator, Sequence, Tuple

import numpy as np
from PIL import Image

from .config import PixelatorError

Pixel = Tuple[int, int, int, int]


class PixelBuffer:
    """Row-major RGBA raster.

    Pixels are stored as a read-only ``uint8`` array of shape
    ``(height, width, 4)``; pixel (x, y) has flat index ``y * width + x``.
    Constructors always copy, so a buffer never aliases caller data.
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray) -> None:
        if not isinstance(data, np.ndarray) or data.ndim != 3 or data.shape[2] != 4:
            raise PixelatorError("Pixel data must have shape (height, width, 4)")
        arr = np.array(data, dtype=np.uint8, copy=True)
        arr.setflags(write=False)
        self._data = arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W, 4) or (H, W, 3) array."""
        if arr.ndim == 3 and arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr.astype(np.uint8), alpha], axis=2)
        return cls(arr)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        """Build a buffer from a Pillow image, converting to RGBA."""
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(np.array(img, dtype=np.uint8))

    @classmethod
    def from_pixels(
        cls, width: int, height: int, pixels: Sequence[Sequence[int]]
    ) -> "PixelBuffer":
        """Build a buffer from a flat row-major sequence of RGBA records."""
        if len(pixels) != width * height:
            raise PixelatorError(
                f"Expected {width * height} pixels, got {len(pixels)}"
            )
        arr = np.asarray(pixels, dtype=np.uint8)
        if arr.size and (arr.ndim != 2 or arr.shape[-1] != 4):
            raise PixelatorError("Pixel records must have 4 channels (RGBA)")
        arr = arr.reshape(height, width, 4)
        return cls(arr)

    @classmethod
    def empty(cls, width: int = 0, height: int = 0) -> "PixelBuffer":
        """Zero-area buffer."""
        if width and height:
            raise PixelatorError("Empty buffer must have a zero dimension")
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the (H, W, 4) pixel array."""
        return self._data

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def index_of(self, x: int, y: int) -> int:
        """Return the flat row-major index of pixel (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self.size}")
        return y * self.width + x

    def pixel_at(self, x: int, y: int) -> Pixel:
        self.index_of(x, y)
        r, g, b, a = self._data[y, x]
        return int(r), int(g), int(b), int(a)

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the pixel array."""
        return self._data.copy()

    def to_image(self) -> Image.Image:
        if self.is_empty():
            raise PixelatorError("Cannot convert an empty buffer to an image")
        return Image.fromarray(self.to_array(), "RGBA")

    def __len__(self) -> int:
        return self.width * self.height

    def __iter__(self) -> Iterator[Pixel]:
        for r, g, b, a in self._data.reshape(-1, 4):
            yield int(r), int(g), int(b), int(a)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(
            np.array_equal(self._data, other._data)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
