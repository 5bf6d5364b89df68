"""Pixelator - Block pixelation for raster images.

Every block of the image grid is painted with the color of its top-left
pixel. The original image is never modified, so the filter can be re-run
with a different block size.

Example:
    from pixelator import Config, process_image_bytes

    with open("input.png", "rb") as f:
        input_bytes = f.read()

    config = Config(block_size=12)
    output_bytes = process_image_bytes(input_bytes, config)

    with open("output.png", "wb") as f:
        f.write(output_bytes)

Working with pixel buffers directly:

    from pixelator import load_image, pixelate, save_image

    source = load_image("input.png")
    save_image(pixelate(source, 8), "pixelated-image.png")

For debug logging, enable with:

    import logging
    logging.getLogger("pixelator").setLevel(logging.DEBUG)
    logging.basicConfig(level=logging.DEBUG)
"""
import logging

# Package logger - disabled by default, enable with logging.getLogger("pixelator").setLevel(logging.DEBUG)
logger = logging.getLogger("pixelator")
logger.addHandler(logging.NullHandler())
from .buffer import PixelBuffer
from .cli import (
    ProcessingResult,
    main,
    process_image,
    process_image_bytes,
    process_image_bytes_with_blocks,
)
from .config import (
    Config,
    DecodeFailureError,
    EmptyInputError,
    InvalidParameterError,
    PixelatorError,
    clamp_block_size,
    validate_block_size,
)
from .engine import Block, count_blocks, iter_blocks, pixelate
from .loader import (
    DEFAULT_DOWNLOAD_NAME,
    decode_image,
    encode_image,
    is_image_file,
    load_image,
    save_image,
)
from .session import PixelatorSession

__all__ = [
    "Config",
    "PixelatorError",
    "InvalidParameterError",
    "DecodeFailureError",
    "EmptyInputError",
    "clamp_block_size",
    "validate_block_size",
    "PixelBuffer",
    # Engine
    "Block",
    "count_blocks",
    "iter_blocks",
    "pixelate",
    # Loading and export
    "DEFAULT_DOWNLOAD_NAME",
    "decode_image",
    "encode_image",
    "is_image_file",
    "load_image",
    "save_image",
    "PixelatorSession",
    "ProcessingResult",
    "main",
    "process_image",
    "process_image_bytes",
    "process_image_bytes_with_blocks",
]

__version__ = "1.0.0"
