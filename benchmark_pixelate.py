#!/usr/bin/env python
"""Benchmark pixelation timing across block sizes.

Processes every image in the testdata folder at a range of block sizes and
records how long decoding, pixelating and encoding take. Results are saved
to a JSON file for comparison across code changes. When no testdata folder
exists, a synthetic noise image is used instead.

Usage:
    python benchmark_pixelate.py [--output results.json]
"""
from __future__ import annotations

import json
import sys
import time
from collections import defaultdict
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple

import numpy as np

from pixelator import PixelBuffer, count_blocks, encode_image, load_image, pixelate

BLOCK_SIZES = (2, 5, 10, 25, 50)
REPEATS = 3


@dataclass
class ImageResult:
    """Results for a single image."""
    filename: str
    width: int
    height: int
    timings_ms: Dict[str, float]
    blocks: Dict[str, int]
    encode_ms: float


@dataclass
class BenchmarkResults:
    """Aggregate benchmark results."""
    timestamp: str
    num_images: int
    total_time_ms: float
    avg_ms_by_block_size: Dict[str, float]
    image_results: List[Dict[str, Any]]


def get_test_images(testdata_dir: Path) -> List[Path]:
    """Get all input images from testdata directory."""
    extensions = {'.png', '.jpg', '.jpeg', '.webp', '.gif'}
    images = []
    for f in testdata_dir.iterdir():
        if f.suffix.lower() in extensions and '_output' not in f.stem:
            images.append(f)
    return sorted(images)


def synthetic_image(width: int = 1024, height: int = 768) -> PixelBuffer:
    """Random RGBA noise with a fixed seed."""
    rng = np.random.default_rng(42)
    arr = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return PixelBuffer(arr)


def benchmark_buffer(name: str, source: PixelBuffer) -> ImageResult:
    """Time pixelate() at each block size (best of REPEATS)."""
    timings: Dict[str, float] = {}
    blocks: Dict[str, int] = {}
    result = source
    for block_size in BLOCK_SIZES:
        best = float('inf')
        for _ in range(REPEATS):
            start = time.perf_counter()
            result = pixelate(source, block_size)
            best = min(best, time.perf_counter() - start)
        timings[str(block_size)] = round(best * 1000, 3)
        blocks[str(block_size)] = count_blocks(source.width, source.height, block_size)

    start = time.perf_counter()
    encode_image(result, "PNG")
    encode_ms = (time.perf_counter() - start) * 1000

    return ImageResult(
        filename=name,
        width=source.width,
        height=source.height,
        timings_ms=timings,
        blocks=blocks,
        encode_ms=round(encode_ms, 2),
    )


def run_benchmark(sources: List[Tuple[str, PixelBuffer]]) -> BenchmarkResults:
    """Run benchmark on all sources."""
    print(f"Benchmarking {len(sources)} image(s) at block sizes {BLOCK_SIZES}")
    print("-" * 60)

    image_results: List[ImageResult] = []
    total_start = time.perf_counter()

    for name, source in sources:
        print(f"Processing {name}...", end=" ", flush=True)
        result = benchmark_buffer(name, source)
        image_results.append(result)
        slowest = max(result.timings_ms.values())
        print(f"{result.width}x{result.height} slowest={slowest:.2f}ms")

    total_time_ms = (time.perf_counter() - total_start) * 1000

    by_size: Dict[str, List[float]] = defaultdict(list)
    for result in image_results:
        for size, ms in result.timings_ms.items():
            by_size[size].append(ms)

    return BenchmarkResults(
        timestamp=datetime.now().isoformat(),
        num_images=len(image_results),
        total_time_ms=round(total_time_ms, 2),
        avg_ms_by_block_size={
            size: round(sum(values) / len(values), 3)
            for size, values in by_size.items()
        },
        image_results=[asdict(r) for r in image_results],
    )


def print_summary(results: BenchmarkResults) -> None:
    """Print a summary of the benchmark results."""
    print("\n" + "=" * 60)
    print("BENCHMARK SUMMARY")
    print("=" * 60)
    print(f"Images processed: {results.num_images}")
    print(f"Total time: {results.total_time_ms:.0f}ms")
    print()

    print("AVERAGE PIXELATE TIME BY BLOCK SIZE:")
    print("-" * 40)
    for size, ms in sorted(results.avg_ms_by_block_size.items(), key=lambda x: int(x[0])):
        print(f"  block {size:>3s}: {ms:8.3f}ms")


def main() -> None:
    """Main entry point."""
    output_file = "benchmark_results.json"
    if len(sys.argv) > 1:
        if sys.argv[1] in ('-h', '--help'):
            print(__doc__)
            sys.exit(0)
        elif sys.argv[1] == '--output' and len(sys.argv) > 2:
            output_file = sys.argv[2]
        else:
            output_file = sys.argv[1]

    script_dir = Path(__file__).parent
    testdata_dir = script_dir / "testdata"

    if testdata_dir.exists():
        sources = [(p.name, load_image(p)) for p in get_test_images(testdata_dir)]
    else:
        sources = []
    if not sources:
        print("No testdata images, using synthetic 1024x768 noise")
        sources = [("synthetic", synthetic_image())]

    results = run_benchmark(sources)
    print_summary(results)

    output_path = script_dir / output_file
    with open(output_path, 'w') as f:
        json.dump(asdict(results), f, indent=2)

    print(f"\nResults saved to: {output_path}")


if __name__ == "__main__":
    main()
