"""Adaptive local thresholding driven by window mean and contrast."""

import logging

import numpy as np

from imgclean.config import DEFAULT_HALF_WINDOW
from imgclean.models import GrayImage
from imgclean.preprocessing.window_stats import local_mean_stddev

logger = logging.getLogger(__name__)


def binarize_adaptive(gray: GrayImage, half_window: int = DEFAULT_HALF_WINDOW) -> GrayImage:
    """
    Binarize using local mean, local stddev and the global mean.

    For each pixel::

        adaptive  = (s - s_min) / (s_max - s_min)      (0 if s_max == s_min)
        threshold = m - (m^2 - s) / ((g + s) * (adaptive + s))

    where ``m``/``s`` are the window mean/stddev and ``g`` the global mean.
    Pixels below the threshold become ink (0), everything else paper (255).

    When the denominator is exactly zero (flat window with zero contrast,
    or an all-black image) the pixel is paper. The float evaluation of the
    formula yields -inf or NaN there, and neither compares below.

    Returns:
        Binary image (text=black, background=white).
    """
    if gray.empty:
        logger.debug("binarize_adaptive: empty input")
        return GrayImage()

    pixels = gray.as_array().astype(np.float64)
    g_mean = float(pixels.mean())

    mean, stddev = local_mean_stddev(gray, half_window)
    min_stddev = float(stddev.min())
    max_stddev = float(stddev.max())

    if max_stddev > min_stddev:
        adaptive = (stddev - min_stddev) / (max_stddev - min_stddev)
    else:
        adaptive = np.zeros_like(stddev)

    denominator = (g_mean + stddev) * (adaptive + stddev)
    numerator = mean * mean - stddev
    degenerate = denominator == 0

    correction = np.divide(
        numerator,
        denominator,
        out=np.zeros_like(numerator),
        where=~degenerate,
    )
    threshold = mean - correction

    ink = (pixels < threshold) & ~degenerate
    logger.debug(
        "binarize_adaptive: %dx%d g_mean=%.2f stddev=[%.2f, %.2f] degenerate=%d",
        gray.width,
        gray.height,
        g_mean,
        min_stddev,
        max_stddev,
        int(degenerate.sum()),
    )

    return GrayImage(
        width=gray.width,
        height=gray.height,
        maxval=gray.maxval,
        pixels=np.where(ink, 0, 255).astype(np.uint8).ravel(),
    )
