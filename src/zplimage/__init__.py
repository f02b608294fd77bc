"""Convert raster images to ZPL ^GFA graphic field labels."""

from zplimage.converter import ImageZplConverter
from zplimage.converters import (
    ConversionError,
    DecodeError,
    DimensionMismatchError,
    InvalidConfigurationError,
    bytes_to_zpl,
    image_to_zpl,
)
from zplimage.models import GraphicField, LabelDimensions

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "DecodeError",
    "DimensionMismatchError",
    "GraphicField",
    "ImageZplConverter",
    "InvalidConfigurationError",
    "LabelDimensions",
    "bytes_to_zpl",
    "image_to_zpl",
]
