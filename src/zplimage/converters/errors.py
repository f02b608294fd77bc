"""Exceptions raised by the image to ZPL pipeline."""


class ConversionError(Exception):
    """Base class for conversion failures.

    Every failure is terminal for the conversion attempt; ``stage`` names the
    pipeline step that rejected its input.
    """

    stage = "convert"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class InvalidConfigurationError(ConversionError, ValueError):
    """A conversion parameter (width, threshold, darkness) is out of range."""

    stage = "configure"


class DecodeError(ConversionError):
    """Image data could not be decoded into a raster."""

    stage = "decode"


class DimensionMismatchError(ConversionError):
    """Resampled raster does not match the resolved label dimensions."""

    stage = "resample"
