"""Public API for document image cleaning."""

import logging
import time
from pathlib import Path

from imgclean.config import DEFAULT_FACTOR, DEFAULT_HALF_WINDOW, CleaningConfig
from imgclean.io.file_handler import load_image, make_file_path, save_image
from imgclean.models import ColorImage, ThresholdStrategy
from imgclean.pipeline import clean

logger = logging.getLogger(__name__)


class ImageCleaner:
    """
    Main entry point for turning scans and photos into black-and-white pages.

    Usage:
        cleaner = ImageCleaner(strategy="adaptive")
        cleaner.clean_image("scan.jpg", "out/scan.png")
    """

    def __init__(
        self,
        strategy: ThresholdStrategy | str = ThresholdStrategy.INTEGRAL,
        half_window: int = DEFAULT_HALF_WINDOW,
        factor: float = DEFAULT_FACTOR,
    ):
        """
        Initialize the cleaner.

        Args:
            strategy: 'adaptive' or 'integral' thresholding.
            half_window: Radius of the local window (default: 7, a 15x15 window).
            factor: Local mean multiplier for the integral strategy (default: 0.85).

        Raises:
            ValueError: If any setting is out of range.
        """
        self.config = CleaningConfig(
            strategy=strategy, half_window=half_window, factor=factor
        )

    def clean_image(self, input_path: str | Path, output_path: str | Path) -> ColorImage:
        """
        Clean the image at ``input_path`` and write the result to ``output_path``.

        Input and output formats are taken from the file extensions.

        Returns:
            The cleaned image.

        Raises:
            FileNotFoundError: If the input file doesn't exist.
            UnsupportedFormatError: If either extension is not supported.
            MalformedImageError: If the input cannot be decoded.
            OSError: If the output cannot be written.
        """
        src = make_file_path(input_path)
        dst = make_file_path(output_path)

        image = load_image(src)
        cleaned = self.clean_array(image)
        save_image(dst, cleaned)

        return cleaned

    def clean_array(self, image: ColorImage) -> ColorImage:
        """Run the cleaning pipeline on an in-memory image."""
        start = time.perf_counter()
        cleaned = clean(image, config=self.config)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        logger.info(
            "Cleaned %dx%d image with %s strategy in %.0fms",
            image.width,
            image.height,
            self.config.strategy.value,
            elapsed_ms,
        )
        return cleaned
