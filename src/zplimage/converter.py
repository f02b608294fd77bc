"""Reusable image to ZPL converter."""

import logging
from pathlib import Path

from PIL import Image

from zplimage.config import ConverterConfig
from zplimage.converters import decode_image, image_to_zpl, open_image, render_preview
from zplimage.converters.errors import DecodeError
from zplimage.models.graphic import GraphicField

logger = logging.getLogger(__name__)

ImageSource = bytes | bytearray | memoryview | str | Path | Image.Image


class ImageZplConverter:
    """Converts images to print-ready ZPL for label mode printing.

    Holds a validated configuration only; every conversion resolves the
    label size afresh, so one converter can be shared freely.

    Example:
        converter = ImageZplConverter(width=400)
        zpl = converter.convert_to_string(png_bytes)
    """

    def __init__(self, config: ConverterConfig | None = None, **options) -> None:
        """Initialize the converter.

        Args:
            config: Prepared configuration. Mutually exclusive with options.
            **options: ConverterConfig fields (width, threshold, darkness, ...).

        Raises:
            InvalidConfigurationError: If options are out of range.
        """
        if config is not None and options:
            raise TypeError("Pass either a config or keyword options, not both")
        self.config = config if config is not None else ConverterConfig.create(**options)

    @property
    def width(self) -> int:
        return self.config.width

    def convert(self, source: ImageSource) -> GraphicField:
        """Convert an image to a ZPL graphic field.

        Args:
            source: Encoded image bytes, an image file path or a PIL image.

        Raises:
            ConversionError: If any stage fails.
        """
        image = self._load(source)
        graphic = image_to_zpl(
            image,
            width=self.config.width,
            threshold=self.config.threshold,
            darkness=self.config.darkness,
            label_offset_x=self.config.label_offset_x,
            label_offset_y=self.config.label_offset_y,
            uppercase=self.config.uppercase_hex,
        )
        logger.info(
            f"Converted image to {graphic.dimensions.width}x{graphic.dimensions.height} "
            f"ZPL graphic ({graphic.dimensions.total_bytes} bytes)"
        )
        return graphic

    def convert_to_string(self, source: ImageSource) -> str:
        """Convert an image and return only the ZPL command."""
        return self.convert(source).command

    def preview(self, source: ImageSource, format: str = "PNG") -> bytes:
        """Render the label bitmap as it will print."""
        return render_preview(
            self._load(source),
            width=self.config.width,
            threshold=self.config.threshold,
            format=format,
        )

    def _load(self, source: ImageSource) -> Image.Image:
        if isinstance(source, Image.Image):
            return source
        if isinstance(source, (bytes, bytearray, memoryview)):
            return decode_image(source)
        if isinstance(source, (str, Path)):
            return open_image(source)
        raise DecodeError(f"Unsupported image source: {type(source).__name__}")
