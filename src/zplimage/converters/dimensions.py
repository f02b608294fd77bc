"""Label size resolution.

Label mode bitmaps are byte-aligned on both axes and use a fixed 2:1
width to height ratio. The source image is stretched to fit; its own
aspect ratio is not preserved.
"""

import logging

from zplimage.converters.errors import InvalidConfigurationError
from zplimage.models.graphic import LabelDimensions

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 560


def nearest_multiple_of_eight(value: int) -> int:
    """Round value up to the next multiple of 8 (unchanged if already aligned)."""
    remainder = value % 8
    if remainder != 0:
        value += 8 - remainder
    return value


def resolve_dimensions(width: int = DEFAULT_WIDTH) -> LabelDimensions:
    """Resolve the label bitmap size for a requested width.

    Args:
        width: Requested width in dots.

    Returns:
        Byte-aligned dimensions, height being half the aligned width
        rounded up to a multiple of 8.

    Raises:
        InvalidConfigurationError: If width is not a positive integer.
    """
    if isinstance(width, bool) or not isinstance(width, int):
        raise InvalidConfigurationError(f"Width must be an integer, got {width!r}")
    if width <= 0:
        raise InvalidConfigurationError(f"Width must be positive, got {width}")

    resolved_width = nearest_multiple_of_eight(width)
    resolved_height = nearest_multiple_of_eight(resolved_width // 2)

    logger.debug(f"Resolved width {width} to {resolved_width}x{resolved_height}")
    return LabelDimensions(width=resolved_width, height=resolved_height)
