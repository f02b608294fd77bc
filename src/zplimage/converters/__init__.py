"""Image to ZPL graphic field pipeline."""

from zplimage.converters.bitmap import DEFAULT_THRESHOLD, binarize, hex_encode, pack_bits
from zplimage.converters.dimensions import DEFAULT_WIDTH, nearest_multiple_of_eight, resolve_dimensions
from zplimage.converters.errors import (
    ConversionError,
    DecodeError,
    DimensionMismatchError,
    InvalidConfigurationError,
)
from zplimage.converters.raster import decode_image, open_image, resample, to_grayscale
from zplimage.converters.zpl import assemble_command, bytes_to_zpl, image_to_zpl, render_preview

__all__ = [
    "DEFAULT_THRESHOLD",
    "DEFAULT_WIDTH",
    "ConversionError",
    "DecodeError",
    "DimensionMismatchError",
    "InvalidConfigurationError",
    "assemble_command",
    "binarize",
    "bytes_to_zpl",
    "decode_image",
    "hex_encode",
    "image_to_zpl",
    "nearest_multiple_of_eight",
    "open_image",
    "pack_bits",
    "render_preview",
    "resample",
    "resolve_dimensions",
    "to_grayscale",
]
