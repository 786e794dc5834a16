"""Conversion between RGB and 8-bit grayscale images."""

import logging

import numpy as np

from imgclean.models import ColorImage, GrayImage

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
_LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)

_HALF = np.float32(0.5)


def to_grayscale(image: ColorImage) -> GrayImage:
    """
    Convert an RGB image to grayscale and stretch it to the full 0-255 range.

    Luma is rounded half away from zero (add 0.5, truncate), then every
    sample is rescaled by ``255 / max`` and rounded the same way, so the
    brightest pixel always maps to 255. Arithmetic is single precision.
    """
    if image.empty:
        logger.debug("to_grayscale: empty input")
        return GrayImage()

    rgb = image.pixels.reshape(-1, 3).astype(np.float32)
    luma = (
        rgb[:, 0] * _LUMA_WEIGHTS[0]
        + rgb[:, 1] * _LUMA_WEIGHTS[1]
        + rgb[:, 2] * _LUMA_WEIGHTS[2]
    )
    rounded = (luma + _HALF).astype(np.uint32)

    max_gray = int(rounded.max())
    if max_gray == 0:
        max_gray = 1  # all-black image

    scale = np.float32(255.0) / np.float32(max_gray)
    stretched = (rounded.astype(np.float32) * scale + _HALF).astype(np.uint8)

    return GrayImage(
        width=image.width,
        height=image.height,
        maxval=255,
        pixels=stretched,
    )


def to_color(gray: GrayImage) -> ColorImage:
    """Replicate a grayscale image into identical R, G and B channels."""
    if gray.empty:
        return ColorImage()

    return ColorImage(
        width=gray.width,
        height=gray.height,
        maxval=gray.maxval,
        pixels=np.repeat(gray.pixels.astype(np.uint16), 3),
    )
