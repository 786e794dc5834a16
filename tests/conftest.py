"""Shared fixtures for the image cleaning tests."""

from pathlib import Path

import numpy as np
import pytest

from imgclean.models import ColorImage

SAMPLE_PPM = Path(__file__).parent / "data" / "3x3-test.ppm"

# Pixels of SAMPLE_PPM in row-major R, G, B order
SAMPLE_PIXELS = [
    255, 0, 0, 0, 255, 0, 0, 0, 255,
    255, 255, 255, 103, 103, 103, 0, 0, 0,
    0, 255, 255, 255, 0, 255, 255, 0, 0,
]


@pytest.fixture
def sample_color():
    return ColorImage(
        width=3,
        height=3,
        maxval=255,
        pixels=np.array(SAMPLE_PIXELS, dtype=np.uint16),
    )
