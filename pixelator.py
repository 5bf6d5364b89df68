"""Script entry point for the pixelator.

For library use, import from the pixelator package:

    from pixelator import Config, process_image_bytes, pixelate
"""
from __future__ import annotations

import sys

from pixelator import (
    Config,
    PixelatorError,
    main,
    process_image,
    process_image_bytes,
)

__all__ = [
    "Config",
    "PixelatorError",
    "main",
    "process_image",
    "process_image_bytes",
]

if __name__ == "__main__":
    sys.exit(main(sys.argv))
