"""
Local window statistics for adaptive thresholding.

Every pixel gets a square neighborhood of radius ``half_window``. Near the
image border the window shrinks instead of being padded, so a corner pixel
with radius 7 sees an 8x8 block rather than 15x15. Both engines below
share this geometry through ``window_bounds``.

Two engines:
- direct: explicit summation over the window, gives mean and population
  standard deviation. O(window^2) per pixel.
- integral: summed-area table, gives the mean only. O(1) per pixel.
"""

import numpy as np

from imgclean.models import GrayImage


def window_bounds(length: int, half_window: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Inclusive window bounds along one axis, clamped to ``[0, length - 1]``.

    Returns:
        (lo, hi) arrays of shape (length,).
    """
    idx = np.arange(length)
    lo = np.maximum(0, idx - half_window)
    hi = np.minimum(length - 1, idx + half_window)
    return lo, hi


def window_counts(width: int, height: int, half_window: int) -> np.ndarray:
    """Number of samples inside each pixel's window, shape (height, width)."""
    x1, x2 = window_bounds(width, half_window)
    y1, y2 = window_bounds(height, half_window)
    return np.outer(y2 - y1 + 1, x2 - x1 + 1)


def _shift_slices(length: int, offset: int) -> tuple[slice, slice]:
    """Target and source slices pairing index ``t`` with ``t + offset``."""
    dst = slice(max(0, -offset), length - max(0, offset))
    src = slice(max(0, offset), length + min(0, offset))
    return dst, src


def _window_offsets(width: int, height: int, half_window: int):
    """Yield (dst, src) slice pairs for every in-range window offset."""
    ry = min(half_window, height - 1)
    rx = min(half_window, width - 1)
    for dy in range(-ry, ry + 1):
        dst_y, src_y = _shift_slices(height, dy)
        for dx in range(-rx, rx + 1):
            dst_x, src_x = _shift_slices(width, dx)
            yield (dst_y, dst_x), (src_y, src_x)


def local_mean_stddev(
    gray: GrayImage, half_window: int
) -> tuple[np.ndarray, np.ndarray]:
    """
    Direct engine: per-pixel window mean and population standard deviation.

    Sums are accumulated by adding every window offset of the whole image
    at once, which keeps the per-pixel cost at O(window^2) while letting
    numpy do the inner loop. The deviation is a second pass around the
    finished mean.

    Returns:
        (mean, stddev) float64 arrays of shape (height, width).
    """
    pixels = gray.as_array().astype(np.float64)
    counts = window_counts(gray.width, gray.height, half_window).astype(np.float64)
    offsets = list(_window_offsets(gray.width, gray.height, half_window))

    sums = np.zeros_like(pixels)
    for dst, src in offsets:
        sums[dst] += pixels[src]
    mean = sums / counts

    sq_dev = np.zeros_like(pixels)
    for dst, src in offsets:
        sq_dev[dst] += (pixels[src] - mean[dst]) ** 2
    stddev = np.sqrt(sq_dev / counts)

    return mean, stddev


def integral_image(gray: GrayImage) -> np.ndarray:
    """
    Build the summed-area table of a grayscale image.

    ``table[y + 1, x + 1]`` holds the sum of all samples at or above and
    left of ``(x, y)``; row 0 and column 0 are zero so lookups at
    ``x1 - 1`` or ``y1 - 1`` need no special casing. Cumulative sums along
    both axes evaluate the recurrence
    ``S(x, y) = p(x, y) + S(x-1, y) + S(x, y-1) - S(x-1, y-1)``.
    """
    table = np.zeros((gray.height + 1, gray.width + 1), dtype=np.int64)
    pixels = gray.as_array().astype(np.int64)
    table[1:, 1:] = pixels.cumsum(axis=0).cumsum(axis=1)
    return table


def integral_local_mean(
    gray: GrayImage, half_window: int, table: np.ndarray | None = None
) -> np.ndarray:
    """
    Integral engine: per-pixel window mean from four table lookups.

    Args:
        gray: Source image.
        half_window: Window radius.
        table: Precomputed ``integral_image(gray)``, built if omitted.

    Returns:
        float64 array of shape (height, width).
    """
    if table is None:
        table = integral_image(gray)

    x1, x2 = window_bounds(gray.width, half_window)
    y1, y2 = window_bounds(gray.height, half_window)

    # S(x2, y2) - S(x1-1, y2) - S(x2, y1-1) + S(x1-1, y1-1), shifted by one
    sums = (
        table[np.ix_(y2 + 1, x2 + 1)]
        - table[np.ix_(y2 + 1, x1)]
        - table[np.ix_(y1, x2 + 1)]
        + table[np.ix_(y1, x1)]
    )
    counts = window_counts(gray.width, gray.height, half_window)
    return sums / counts
