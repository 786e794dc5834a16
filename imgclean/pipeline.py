"""Cleaning pipeline: grayscale, binarize, back to RGB."""

import logging
from dataclasses import replace

from imgclean.config import CleaningConfig
from imgclean.models import ColorImage, ThresholdStrategy
from imgclean.preprocessing.adaptive import binarize_adaptive
from imgclean.preprocessing.grayscale import to_color, to_grayscale
from imgclean.preprocessing.integral import binarize_integral

logger = logging.getLogger(__name__)


def clean(
    image: ColorImage,
    strategy: ThresholdStrategy | str | None = None,
    config: CleaningConfig | None = None,
) -> ColorImage:
    """
    Turn a color scan into a black-and-white page.

    Steps:
    1. Grayscale conversion with range stretch
    2. Local thresholding (adaptive or integral, per ``config.strategy``)
    3. Replication back to three channels

    Args:
        image: Input RGB image.
        strategy: Overrides ``config.strategy`` when given.
        config: Window radius, factor and default strategy.

    Empty images pass through as empty output; nothing is raised.

    Returns:
        RGB image with R=G=B in {0, 255}.
    """
    if config is None:
        config = CleaningConfig()
    if strategy is not None:
        config = replace(config, strategy=strategy)

    logger.debug(
        "clean: %dx%d maxval=%d strategy=%s",
        image.width,
        image.height,
        image.maxval,
        config.strategy.value,
    )

    gray = to_grayscale(image)

    if config.strategy == ThresholdStrategy.ADAPTIVE:
        binary = binarize_adaptive(gray, half_window=config.half_window)
    else:
        binary = binarize_integral(
            gray, half_window=config.half_window, factor=config.factor
        )

    return to_color(binary)
