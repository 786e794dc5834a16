"""Local mean thresholding backed by an integral image."""

import logging

import numpy as np

from imgclean.config import DEFAULT_FACTOR, DEFAULT_HALF_WINDOW
from imgclean.models import GrayImage
from imgclean.preprocessing.window_stats import integral_image, integral_local_mean

logger = logging.getLogger(__name__)


def binarize_integral(
    gray: GrayImage,
    half_window: int = DEFAULT_HALF_WINDOW,
    factor: float = DEFAULT_FACTOR,
) -> GrayImage:
    """
    Binarize by comparing each pixel against a fraction of its local mean.

    A pixel is ink (0) when ``value < factor * local_mean``, paper (255)
    otherwise. The local mean comes from the summed-area table, so the cost
    does not depend on the window size.

    Returns:
        Binary image (text=black, background=white).
    """
    if gray.empty:
        logger.debug("binarize_integral: empty input")
        return GrayImage()

    table = integral_image(gray)
    local_mean = integral_local_mean(gray, half_window, table)

    pixels = gray.as_array().astype(np.float64)
    ink = pixels < factor * local_mean
    logger.debug(
        "binarize_integral: %dx%d half_window=%d factor=%.3f ink=%d",
        gray.width,
        gray.height,
        half_window,
        factor,
        int(ink.sum()),
    )

    return GrayImage(
        width=gray.width,
        height=gray.height,
        maxval=gray.maxval,
        pixels=np.where(ink, 0, 255).astype(np.uint8).ravel(),
    )
