"""Data models for image cleaning."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class ImageFormat(Enum):
    PPM_ASCII = "ppm"  # P3
    PNG = "png"
    JPG = "jpg"
    UNKNOWN = "unknown"


class ThresholdStrategy(Enum):
    """Binarization algorithm used by the cleaning pipeline."""

    ADAPTIVE = "adaptive"  # windowed mean/stddev threshold
    INTEGRAL = "integral"  # summed-area table local mean threshold


@dataclass
class FilePath:
    """File path with its detected image format."""

    path: str
    format: ImageFormat = ImageFormat.UNKNOWN


def _empty_samples(dtype) -> np.ndarray:
    return np.zeros(0, dtype=dtype)


@dataclass
class ColorImage:
    """
    RGB image with interleaved samples in row-major order.

    Sample ``c`` of pixel ``(x, y)`` lives at ``(y * width + x) * 3 + c``.
    Samples are in ``[0, maxval]``; ``maxval`` may be up to 65535.
    """

    width: int = 0
    height: int = 0
    maxval: int = 255
    pixels: np.ndarray = field(default_factory=lambda: _empty_samples(np.uint16))

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0 or self.pixels.size == 0

    def as_array(self) -> np.ndarray:
        """Return the samples as an (height, width, 3) view."""
        return self.pixels.reshape(self.height, self.width, 3)

    def clear(self):
        self.width = 0
        self.height = 0
        self.maxval = 255
        self.pixels = _empty_samples(np.uint16)


@dataclass
class GrayImage:
    """Single channel 8-bit image, row-major."""

    width: int = 0
    height: int = 0
    maxval: int = 255
    pixels: np.ndarray = field(default_factory=lambda: _empty_samples(np.uint8))

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0 or self.pixels.size == 0

    def as_array(self) -> np.ndarray:
        """Return the samples as an (height, width) view."""
        return self.pixels.reshape(self.height, self.width)

    def clear(self):
        self.width = 0
        self.height = 0
        self.maxval = 255
        self.pixels = _empty_samples(np.uint8)
