"""Reading and writing images in ASCII PPM, PNG and JPEG formats."""

import logging
import re
from pathlib import Path

import cv2
import numpy as np

from imgclean.errors import MalformedImageError, UnsupportedFormatError
from imgclean.models import ColorImage, FilePath, ImageFormat

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "ppm": ImageFormat.PPM_ASCII,
    "png": ImageFormat.PNG,
    "jpg": ImageFormat.JPG,
    "jpeg": ImageFormat.JPG,
}

_PPM_MAGIC = "P3"
_PPM_MAX_MAXVAL = 65535

# '#' starts a comment running to the end of the line
_PPM_COMMENT = re.compile(r"#[^\r\n]*")


def detect_format(path: str | Path) -> ImageFormat:
    """Detect the image format from the file extension (case-insensitive)."""
    path = str(path)
    dot = path.rfind(".")
    if dot == -1:
        return ImageFormat.UNKNOWN
    return _EXTENSIONS.get(path[dot + 1:].lower(), ImageFormat.UNKNOWN)


def make_file_path(path: str | Path) -> FilePath:
    return FilePath(path=str(path), format=detect_format(path))


def load_image(src: FilePath) -> ColorImage:
    """
    Load an image as RGB.

    Raises:
        UnsupportedFormatError: If the extension is not recognized.
        FileNotFoundError: If the file doesn't exist.
        MalformedImageError: If the file cannot be decoded.
    """
    if src.format == ImageFormat.UNKNOWN:
        raise UnsupportedFormatError(
            f"Unsupported image format: {src.path} "
            "(expected .ppm, .png, .jpg or .jpeg)"
        )

    path = Path(src.path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    if src.format == ImageFormat.PPM_ASCII:
        image = parse_ppm(path.read_text(encoding="ascii", errors="replace"))
    else:
        image = _load_with_opencv(path)

    logger.debug(
        "Loaded %s: %dx%d maxval=%d", path, image.width, image.height, image.maxval
    )
    return image


def save_image(dst: FilePath, image: ColorImage):
    """
    Save an RGB image, creating missing parent directories.

    Raises:
        UnsupportedFormatError: If the extension is not recognized.
        OSError: If the file cannot be written.
    """
    if dst.format == ImageFormat.UNKNOWN:
        raise UnsupportedFormatError(
            f"Unsupported image format: {dst.path} "
            "(expected .ppm, .png, .jpg or .jpeg)"
        )

    path = Path(dst.path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if dst.format == ImageFormat.PPM_ASCII:
        path.write_text(format_ppm(image), encoding="ascii")
    else:
        _save_with_opencv(path, image)

    logger.debug("Saved %s: %dx%d", path, image.width, image.height)


def parse_ppm(text: str) -> ColorImage:
    """
    Parse an ASCII (P3) PPM document.

    Comments run from ``#`` to the end of the line and may appear wherever
    whitespace is allowed. Data after the last sample is ignored.

    Raises:
        MalformedImageError: On a bad header, out-of-range sample or
            missing samples.
    """
    tokens = _PPM_COMMENT.sub(" ", text).split()
    if not tokens or tokens[0] != _PPM_MAGIC:
        raise MalformedImageError("Not an ASCII PPM file (missing P3 magic)")
    if len(tokens) < 4:
        raise MalformedImageError("Truncated PPM header")

    try:
        width, height, maxval = (int(t) for t in tokens[1:4])
    except ValueError:
        raise MalformedImageError(f"Invalid PPM header: {' '.join(tokens[1:4])}") from None

    if width <= 0 or height <= 0 or maxval <= 0:
        raise MalformedImageError(
            f"Invalid PPM geometry: width={width} height={height} maxval={maxval}"
        )
    if maxval > _PPM_MAX_MAXVAL:
        raise MalformedImageError(f"PPM maxval {maxval} exceeds {_PPM_MAX_MAXVAL}")

    sample_count = width * height * 3
    body = tokens[4:4 + sample_count]
    if len(body) != sample_count:
        raise MalformedImageError(
            f"Expected {sample_count} samples for {width}x{height}, found {len(body)}"
        )

    try:
        samples = np.array([int(t) for t in body], dtype=np.int64)
    except ValueError:
        raise MalformedImageError("Non-numeric PPM sample") from None

    if samples.size and (samples.min() < 0 or samples.max() > maxval):
        raise MalformedImageError(f"PPM sample out of range [0, {maxval}]")

    return ColorImage(
        width=width,
        height=height,
        maxval=maxval,
        pixels=samples.astype(np.uint16),
    )


def format_ppm(image: ColorImage) -> str:
    """Serialize an image as ASCII PPM, one ``R G B`` line per pixel."""
    lines = [_PPM_MAGIC, f"{image.width} {image.height}", str(image.maxval)]
    for r, g, b in image.pixels.reshape(-1, 3).tolist():
        lines.append(f"{r} {g} {b}")
    return "\n".join(lines) + "\n"


def _load_with_opencv(path: Path) -> ColorImage:
    bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if bgr is None:
        raise MalformedImageError(f"Cannot read image: {path}")

    rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    h, w = rgb.shape[:2]
    return ColorImage(
        width=w,
        height=h,
        maxval=255,
        pixels=rgb.astype(np.uint16).ravel(),
    )


def _save_with_opencv(path: Path, image: ColorImage):
    rgb = image.as_array().astype(np.float64)
    if image.maxval != 255:
        rgb = np.round(rgb * 255.0 / max(image.maxval, 1))
    rgb = np.clip(rgb, 0, 255).astype(np.uint8)

    bgr = cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
    try:
        written = cv2.imwrite(str(path), bgr)
    except cv2.error as e:
        raise OSError(f"Failed to write image: {path}: {e}") from e
    if not written:
        raise OSError(f"Failed to write image: {path}")
