"""Raster decoding, grayscale normalization and resampling."""

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from zplimage.converters.errors import DecodeError, DimensionMismatchError
from zplimage.models.graphic import LabelDimensions

logger = logging.getLogger(__name__)

# Transparent pixels are flattened onto this before thresholding,
# so they never print.
BACKGROUND = (255, 255, 255, 255)


def decode_image(data: bytes | bytearray | memoryview | None) -> Image.Image:
    """Decode an encoded image buffer (PNG, JPEG, BMP, ...) into a raster.

    Raises:
        DecodeError: If the buffer is empty or not a supported image.
    """
    if not data:
        raise DecodeError("No image data supplied")

    try:
        image = Image.open(io.BytesIO(bytes(data)))
        # Force the decode now; Image.open is lazy
        image.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Cannot decode image data ({len(data)} bytes): {e}") from e

    logger.debug(f"Decoded {image.format} image {image.size[0]}x{image.size[1]} mode={image.mode}")
    return image


def open_image(path: Path | str) -> Image.Image:
    """Read and decode an image file."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise DecodeError(f"Cannot read image file {path}: {e}") from e
    return decode_image(data)


def to_grayscale(image: Image.Image | None) -> Image.Image:
    """Convert a raster to a single 8-bit luminance channel (mode "L").

    Uses ITU-R 601-2 luma weights. Images with an alpha channel or palette
    transparency are composited onto white first, so fully transparent
    pixels come out as background. 16 and 32 bit integer rasters are read
    as 16-bit intensities and scaled to 8 bits; float rasters with values up
    to 1.0 are read as 0.0-1.0 intensities, otherwise as 0-255.

    Raises:
        DecodeError: If image is missing or has no pixels.
    """
    if not isinstance(image, Image.Image):
        raise DecodeError(f"Expected a decoded image, got {type(image).__name__}", stage="grayscale")

    width, height = image.size
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has no pixels ({width}x{height})", stage="grayscale")

    if "A" in image.getbands() or "transparency" in image.info:
        flattened = Image.new("RGBA", image.size, BACKGROUND)
        flattened.alpha_composite(image.convert("RGBA"))
        return flattened.convert("L")

    if image.mode == "L":
        return image.copy()

    # convert("L") clips wide modes at 255, so scale them down first
    if image.mode == "I" or image.mode.startswith("I;16"):
        return image.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    if image.mode == "F":
        _, highest = image.getextrema()
        if highest <= 1.0:
            # Normalized float raster, 0.0 = black, 1.0 = white
            return image.point(lambda v: v * 255).convert("L")
        return image.convert("L")

    return image.convert("L")


def resample(
    image: Image.Image,
    dimensions: LabelDimensions,
    method: Image.Resampling = Image.Resampling.BILINEAR,
) -> Image.Image:
    """Stretch a raster to exactly the resolved label size.

    Raises:
        DimensionMismatchError: If the result is not the requested size.
    """
    target = (dimensions.width, dimensions.height)
    resized = image.resize(target, resample=method)

    if resized.size != target:
        raise DimensionMismatchError(
            f"Resampled image is {resized.size[0]}x{resized.size[1]}, expected {target[0]}x{target[1]}"
        )

    logger.debug(f"Resampled {image.size[0]}x{image.size[1]} to {target[0]}x{target[1]}")
    return resized
