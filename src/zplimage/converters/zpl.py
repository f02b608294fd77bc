"""Convert PIL images to ZPL ^GFA commands."""

import io
import logging

from PIL import Image

from zplimage.converters.bitmap import DEFAULT_THRESHOLD, binarize, hex_encode, pack_bits
from zplimage.converters.dimensions import DEFAULT_WIDTH, resolve_dimensions
from zplimage.converters.errors import (
    ConversionError,
    DimensionMismatchError,
    InvalidConfigurationError,
)
from zplimage.converters.raster import decode_image, resample, to_grayscale
from zplimage.models.graphic import GraphicField, LabelDimensions

logger = logging.getLogger(__name__)


def assemble_command(
    total_bytes: int,
    bytes_per_row: int,
    hex_payload: str,
    darkness: int | None = None,
    label_offset_x: int = 0,
    label_offset_y: int = 0,
) -> str:
    """Wrap a hex bitmap in a complete ZPL label.

    ZPL ^GFA format:
    ^GFA,<total_bytes>,<total_bytes>,<bytes_per_row>,<hex_data>

    The byte count appears twice: once as the binary byte count and once
    as the graphic field count. With no darkness or offset the result is
    exactly ``^XA^FO0,0^GFA,...^XZ``.

    Args:
        total_bytes: Byte count of the whole bitmap.
        bytes_per_row: Bytes per bitmap row.
        hex_payload: Hex encoded bitmap.
        darkness: Print darkness 0-30 (for ~SD command).
        label_offset_x: Horizontal label offset in dots (for ^LH command).
        label_offset_y: Vertical label offset in dots (for ^LH command).

    Returns:
        ZPL command string.
    """
    zpl_parts = ["^XA"]

    # Add darkness setting if specified
    if darkness is not None:
        zpl_parts.append(f"~SD{darkness:02d}")

    # Add label home offset if specified
    if label_offset_x or label_offset_y:
        zpl_parts.append(f"^LH{label_offset_x},{label_offset_y}")

    zpl_parts.append(f"^FO0,0^GFA,{total_bytes},{total_bytes},{bytes_per_row},{hex_payload}")
    zpl_parts.append("^XZ")

    return "".join(zpl_parts)


def _validate_options(darkness: int | None, label_offset_x: int, label_offset_y: int) -> None:
    if darkness is not None and not 0 <= darkness <= 30:
        raise InvalidConfigurationError(f"Darkness must be 0-30, got {darkness}")
    if label_offset_x < 0 or label_offset_y < 0:
        raise InvalidConfigurationError(f"Label offsets must not be negative, got {label_offset_x},{label_offset_y}")


def _label_bitmap(
    image: Image.Image,
    width: int,
    threshold: int,
    method: Image.Resampling,
) -> tuple[LabelDimensions, bytes]:
    """Run the raster stages and return the packed bitmap."""
    dimensions = resolve_dimensions(width)
    grayscale = to_grayscale(image)
    resized = resample(grayscale, dimensions, method)
    bits = binarize(resized, threshold)

    if len(bits) != dimensions.width * dimensions.height:
        raise DimensionMismatchError(
            f"Bit stream has {len(bits)} bits, expected {dimensions.width * dimensions.height}",
            stage="binarize",
        )

    data = pack_bits(bits)
    if len(data) != dimensions.total_bytes:
        raise DimensionMismatchError(
            f"Packed bitmap has {len(data)} bytes, expected {dimensions.total_bytes}",
            stage="pack",
        )

    return dimensions, data


def image_to_zpl(
    image: Image.Image,
    width: int = DEFAULT_WIDTH,
    threshold: int = DEFAULT_THRESHOLD,
    darkness: int | None = None,
    label_offset_x: int = 0,
    label_offset_y: int = 0,
    uppercase: bool = True,
    method: Image.Resampling = Image.Resampling.BILINEAR,
) -> GraphicField:
    """Convert a PIL image to a ZPL ^GFA label.

    The image is converted to grayscale, stretched to the label mode size
    for ``width`` (byte-aligned, height = width / 2), thresholded to 1 bit
    per dot, packed and hex encoded.

    Args:
        image: Decoded PIL image, any mode.
        width: Requested label width in dots.
        threshold: Luminance below which a dot prints.
        darkness: Print darkness 0-30 (for ~SD command).
        label_offset_x: Horizontal label offset in dots (for ^LH command).
        label_offset_y: Vertical label offset in dots (for ^LH command).
        uppercase: Hex digit case.
        method: Resampling filter.

    Returns:
        GraphicField holding the dimensions, bitmap and command.

    Raises:
        ConversionError: If any stage rejects its input.
    """
    try:
        _validate_options(darkness, label_offset_x, label_offset_y)
        dimensions, data = _label_bitmap(image, width, threshold, method)
    except ConversionError as e:
        logger.warning(f"Conversion failed at {e.stage} stage (width={width!r}): {e}")
        raise

    hex_payload = hex_encode(data, uppercase=uppercase)
    command = assemble_command(
        dimensions.total_bytes,
        dimensions.bytes_per_row,
        hex_payload,
        darkness=darkness,
        label_offset_x=label_offset_x,
        label_offset_y=label_offset_y,
    )

    logger.debug(
        f"Encoded {dimensions.width}x{dimensions.height} label, "
        f"{dimensions.total_bytes} bytes, {dimensions.bytes_per_row} bytes/row"
    )
    return GraphicField(dimensions=dimensions, data=data, hex_payload=hex_payload, command=command)


def bytes_to_zpl(data: bytes, width: int = DEFAULT_WIDTH, **options) -> GraphicField:
    """Decode an encoded image buffer and convert it to a ZPL label.

    Keyword options are passed through to image_to_zpl.
    """
    try:
        image = decode_image(data)
    except ConversionError as e:
        logger.warning(f"Conversion failed at {e.stage} stage: {e}")
        raise
    return image_to_zpl(image, width=width, **options)


def render_preview(
    image: Image.Image,
    width: int = DEFAULT_WIDTH,
    threshold: int = DEFAULT_THRESHOLD,
    format: str = "PNG",
) -> bytes:
    """Render the label bitmap as it will print, as an image file.

    Args:
        image: Decoded PIL image, any mode.
        width: Requested label width in dots.
        threshold: Luminance below which a dot prints.
        format: Image format (PNG, BMP, etc.).

    Returns:
        Image data as bytes.
    """
    dimensions, data = _label_bitmap(image, width, threshold, Image.Resampling.BILINEAR)

    # PIL mode "1": bit set = white, so invert the printer bitmap
    inverted = bytes(~b & 0xFF for b in data)
    bitmap = Image.frombytes("1", (dimensions.width, dimensions.height), inverted)

    buffer = io.BytesIO()
    bitmap.save(buffer, format=format)
    return buffer.getvalue()
