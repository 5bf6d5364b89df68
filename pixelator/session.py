"""Stateful pixelation session: load once, adjust, re-run, download."""
from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Union

from .buffer import PixelBuffer
from .config import Config, DecodeFailureError, PixelatorError, clamp_block_size
from .engine import pixelate
from .loader import (
    DEFAULT_DOWNLOAD_NAME,
    ImageSource,
    encode_image,
    is_image_file,
    load_image,
)

logger = logging.getLogger("pixelator")


class PixelatorSession:
    """Holds the loaded image, the current block size and the last result.

    The original buffer is kept untouched so the block size can be changed
    and the filter re-run without reloading. ``run_async`` moves the work
    off the calling thread; only one run may be in flight at a time.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()
        self.original: Optional[PixelBuffer] = None
        self.result: Optional[PixelBuffer] = None
        self.result_bytes: Optional[bytes] = None
        self.block_size = clamp_block_size(self.config.block_size, self.config)
        self._processing = False
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def is_loaded(self) -> bool:
        return self.original is not None

    @property
    def is_processing(self) -> bool:
        return self._processing

    def load(self, source: ImageSource) -> PixelBuffer:
        """Decode a new source image and discard any previous result."""
        buffer = load_image(source)
        self.original = buffer
        self.result = None
        self.result_bytes = None
        logger.debug(f"Session loaded {buffer.width}x{buffer.height} image")
        return buffer

    def load_file(self, path: Union[str, os.PathLike]) -> PixelBuffer:
        """Load from a path, accepting only files with an image MIME type."""
        if not is_image_file(path):
            raise DecodeFailureError(f"Not an image file: {path}")
        return self.load(path)

    def set_block_size(self, value: int) -> int:
        """Set the block size, clamped to the configured range."""
        self.block_size = clamp_block_size(value, self.config)
        return self.block_size

    def _begin(self) -> None:
        with self._lock:
            if self._processing:
                raise PixelatorError("Already processing")
            self._processing = True

    def _finish(self) -> None:
        with self._lock:
            self._processing = False

    def _pixelate(self) -> PixelBuffer:
        try:
            original = self.original
            if original is None:
                raise PixelatorError("No image loaded")
            result = pixelate(original, self.block_size)
            self.result_bytes = encode_image(result, "PNG")
            self.result = result
            return result
        finally:
            self._finish()

    def run(self) -> PixelBuffer:
        """Pixelate the loaded image at the current block size."""
        self._begin()
        return self._pixelate()

    def run_async(self, executor: Optional[ThreadPoolExecutor] = None) -> "Future[PixelBuffer]":
        """Run the filter on a worker thread and return its future."""
        self._begin()
        if executor is None:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="pixelator"
                )
            executor = self._executor
        try:
            return executor.submit(self._pixelate)
        except RuntimeError:
            self._finish()
            raise

    def download(self, path: Union[str, os.PathLike, None] = None) -> str:
        """Write the last result as PNG; returns the path written."""
        if self.result_bytes is None:
            raise PixelatorError("No pixelated image to download")
        target = os.fspath(path) if path is not None else DEFAULT_DOWNLOAD_NAME
        with open(target, "wb") as f:
            f.write(self.result_bytes)
        logger.debug(f"Downloaded result to {target}")
        return target

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "PixelatorSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
