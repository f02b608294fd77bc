"""Monochrome bitmap encoding: thresholding, bit packing and hex encoding."""

import logging
from collections.abc import Iterable

from PIL import Image

from zplimage.converters.errors import InvalidConfigurationError
from zplimage.converters.raster import to_grayscale

logger = logging.getLogger(__name__)

# Luminance strictly below this prints. The midpoint itself (128) is background.
DEFAULT_THRESHOLD = 128


def binarize(image: Image.Image, threshold: int = DEFAULT_THRESHOLD) -> tuple[int, ...]:
    """Threshold a raster into a row-major bit stream.

    In thermal printing 1 = black (print) and 0 = white (no print), so a
    pixel maps to 1 when its luminance is below threshold.

    Args:
        image: Raster to threshold. Non-"L" images are normalized first.
        threshold: Luminance cut-off, 1-255.

    Returns:
        One bit per pixel, row 0 left to right, then row 1, and so on.
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int) or not 1 <= threshold <= 255:
        raise InvalidConfigurationError(f"Threshold must be an integer 1-255, got {threshold!r}")

    if image.mode != "L":
        image = to_grayscale(image)

    # Mode "L" serializes as one byte per pixel in row-major order
    bits = tuple(1 if luminance < threshold else 0 for luminance in image.tobytes())

    logger.debug(f"Binarized {image.size[0]}x{image.size[1]} image, {sum(bits)} dots set")
    return bits


def pack_bits(bits: Iterable[int]) -> bytes:
    """Pack a bit stream into bytes, most significant bit first.

    A trailing group shorter than 8 bits keeps its bits in the high
    positions and is zero-filled on the right, e.g. [1, 1, 0] -> 0xC0.
    """
    packed = bytearray()
    byte_val = 0
    count = 0

    for bit in bits:
        if bit not in (0, 1):
            raise ValueError(f"Bit values must be 0 or 1, got {bit!r}")
        byte_val = (byte_val << 1) | int(bit)
        count += 1
        if count == 8:
            packed.append(byte_val)
            byte_val = 0
            count = 0

    if count:
        packed.append(byte_val << (8 - count))

    return bytes(packed)


def hex_encode(data: bytes | Iterable[int], uppercase: bool = True) -> str:
    """Encode bytes as two hex digits each, without prefix or separators.

    ZPL accepts either case; uppercase is the default.
    """
    spec = "02X" if uppercase else "02x"
    return "".join(format(b, spec) for b in bytes(data))
