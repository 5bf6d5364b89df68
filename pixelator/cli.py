"""Command-line interface for the pixelator."""
from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger("pixelator")

from .config import (
    Config,
    PixelatorError,
    clamp_block_size,
    validate_block_size,
)
from .engine import count_blocks, pixelate
from .loader import decode_image, encode_image, resolve_format
from .preview import show_preview


@dataclass
class ProcessingResult:
    """Result of pixelating image bytes."""

    output_bytes: bytes
    width: int
    height: int
    block_size: int
    block_count: int
    output_format: str


def process_image_bytes(
    input_bytes: bytes, config: Optional[Config] = None
) -> bytes:
    """Pixelate encoded image bytes.

    Args:
        input_bytes: Input image as PNG/JPEG/... bytes.
        config: Configuration options. Uses defaults if None.

    Returns:
        Encoded output image bytes (PNG unless configured otherwise).
    """
    return process_image_bytes_with_blocks(input_bytes, config).output_bytes


def process_image_bytes_with_blocks(
    input_bytes: bytes, config: Optional[Config] = None
) -> ProcessingResult:
    """Pixelate encoded image bytes and report the block grid used.

    The block size in config is used as given; range checks are the
    caller's concern (see parse_args).

    Args:
        input_bytes: Input image bytes.
        config: Configuration options. Uses defaults if None.

    Returns:
        ProcessingResult with output bytes and grid information.
    """
    config = config or Config()
    fmt = resolve_format(config.output_path or None, config.output_format)

    t0 = time.perf_counter()
    source = decode_image(input_bytes)
    t1 = time.perf_counter()

    result = pixelate(source, config.block_size)
    t2 = time.perf_counter()

    output_bytes = encode_image(result, fmt)
    t3 = time.perf_counter()

    if config.timing:
        print(
            "Timing (s): "
            f"load={t1 - t0:.4f}, "
            f"pixelate={t2 - t1:.4f}, "
            f"encode={t3 - t2:.4f}, "
            f"total={t3 - t0:.4f}"
        )

    return ProcessingResult(
        output_bytes=output_bytes,
        width=result.width,
        height=result.height,
        block_size=config.block_size,
        block_count=count_blocks(result.width, result.height, config.block_size),
        output_format=fmt,
    )


def process_image(config: Config) -> None:
    """Pixelate an image file.

    Args:
        config: Configuration with input/output paths.
    """
    print(f"Processing: {config.input_path}")
    try:
        with open(config.input_path, "rb") as f:
            img_bytes = f.read()
    except OSError as exc:
        raise PixelatorError(f"Cannot read input: {exc}") from exc

    result = process_image_bytes_with_blocks(img_bytes, config)
    with open(config.output_path, "wb") as f:
        f.write(result.output_bytes)

    print(f"Saved to: {config.output_path}")
    logger.debug(
        f"{result.width}x{result.height} -> {result.block_count} blocks "
        f"of {result.block_size}px ({result.output_format})"
    )
    if config.preview:
        original = decode_image(img_bytes)
        show_preview(original, pixelate(original, config.block_size), config.block_size)


def parse_args(argv: Sequence[str]) -> Config:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (including program name).

    Returns:
        Configured Config instance.

    Raises:
        PixelatorError: If arguments are invalid.
    """
    args = list(argv[1:])
    preview = False
    timing = False
    debug = False
    strict = False
    output_format: Optional[str] = None
    positional: List[str] = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--preview":
            preview = True
            i += 1
        elif arg == "--timing":
            timing = True
            i += 1
        elif arg == "--debug":
            debug = True
            i += 1
        elif arg == "--strict":
            strict = True
            i += 1
        elif arg == "--format":
            if i + 1 >= len(args):
                raise PixelatorError(_usage_message())
            output_format = args[i + 1].upper()
            i += 2
        elif arg.startswith("--"):
            raise PixelatorError(f"Unknown option: {arg}\n{_usage_message()}")
        else:
            positional.append(arg)
            i += 1

    if len(positional) < 2 or len(positional) > 3:
        raise PixelatorError(_usage_message())

    config = Config(
        input_path=positional[0],
        output_path=positional[1],
        output_format=output_format,
        strict=strict,
        preview=preview,
        timing=timing,
    )

    if len(positional) == 3:
        try:
            requested = int(positional[2])
        except ValueError:
            if strict:
                raise PixelatorError(f"Invalid block size: '{positional[2]}'")
            print(
                f"Warning: invalid block size '{positional[2]}', "
                f"falling back to default ({config.block_size})"
            )
        else:
            if strict:
                config.block_size = validate_block_size(requested, config)
            else:
                config.block_size = clamp_block_size(requested, config)
                if config.block_size != requested:
                    print(
                        f"Warning: block size {requested} out of range, "
                        f"using {config.block_size}"
                    )

    # Enable debug logging if requested
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s"
        )
        logging.getLogger("pixelator").setLevel(logging.DEBUG)

    return config


def _usage_message() -> str:
    """Return usage message string."""
    return (
        "Usage: python pixelator.py input.png output.png [block_size] "
        "[--format FMT] [--strict] [--preview] [--timing] [--debug]"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments. Defaults to sys.argv.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    if argv is None:
        argv = sys.argv
    try:
        config = parse_args(argv)
        process_image(config)
        return 0
    except PixelatorError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except Exception as exc:
        print(f"Processing error: {exc}", file=sys.stderr)
        return 1
