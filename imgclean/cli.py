"""Command-line interface for document image cleaning."""

import argparse
import logging
import sys
import time
from pathlib import Path

from imgclean.config import DEFAULT_FACTOR, DEFAULT_HALF_WINDOW
from imgclean.errors import ImageCleanError
from imgclean.models import ThresholdStrategy


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="imgclean",
        description="Convert a scanned or photographed document into a clean "
        "black-and-white image",
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Input image file (.ppm, .png, .jpg, .jpeg)",
    )
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output image file (.ppm, .png, .jpg, .jpeg)",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in ThresholdStrategy],
        default=ThresholdStrategy.INTEGRAL.value,
        help="Thresholding algorithm (default: integral)",
    )
    parser.add_argument(
        "--half-window",
        type=int,
        default=DEFAULT_HALF_WINDOW,
        help=f"Local window radius in pixels (default: {DEFAULT_HALF_WINDOW})",
    )
    parser.add_argument(
        "--factor",
        type=float,
        default=DEFAULT_FACTOR,
        help=f"Local mean factor for the integral strategy (default: {DEFAULT_FACTOR})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and processing time",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from imgclean.api import ImageCleaner

    try:
        cleaner = ImageCleaner(
            strategy=args.strategy,
            half_window=args.half_window,
            factor=args.factor,
        )
    except ValueError as e:
        parser.error(str(e))

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Image not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    start = time.perf_counter()
    try:
        cleaner.clean_image(input_path, args.output)
    except ImageCleanError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(
            "Hint: Supported file extensions are .ppm, .png, .jpg and .jpeg",
            file=sys.stderr,
        )
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Saved image to '{args.output}'")
    if args.verbose:
        print(f"Processing time: {(time.perf_counter() - start) * 1000.0:.0f} ms")


if __name__ == "__main__":
    main()
