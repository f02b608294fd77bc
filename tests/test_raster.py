"""Tests for decoding, grayscale normalization and resampling."""

import pytest
from PIL import Image

from zplimage.converters import (
    DecodeError,
    DimensionMismatchError,
    decode_image,
    open_image,
    resample,
    resolve_dimensions,
    to_grayscale,
)


class TestDecodeImage:
    """Tests for decoding encoded image buffers."""

    def test_decode_png(self, white_png):
        """PNG bytes decode to a raster of the right size."""
        image = decode_image(white_png)

        assert image.size == (300, 200)
        assert image.format == "PNG"

    def test_decode_bytearray(self, black_png):
        """Any bytes-like buffer is accepted."""
        image = decode_image(bytearray(black_png))

        assert image.size == (40, 20)

    @pytest.mark.parametrize("data", [None, b""])
    def test_missing_data(self, data):
        """Empty input is a decode error."""
        with pytest.raises(DecodeError) as exc_info:
            decode_image(data)

        assert exc_info.value.stage == "decode"

    def test_garbage_data(self):
        """Bytes that are not an image are a decode error."""
        with pytest.raises(DecodeError):
            decode_image(b"definitely not an image")

    def test_open_image(self, tmp_path, black_png):
        """Image files are read and decoded."""
        path = tmp_path / "logo.png"
        path.write_bytes(black_png)

        assert open_image(path).size == (40, 20)

    def test_open_missing_file(self, tmp_path):
        """Missing files are a decode error."""
        with pytest.raises(DecodeError):
            open_image(tmp_path / "missing.png")


class TestToGrayscale:
    """Tests for luminance conversion."""

    def test_rgb_to_luminance(self):
        """RGB becomes single channel with the same size."""
        image = Image.new("RGB", (5, 3), color=(255, 255, 255))

        result = to_grayscale(image)

        assert result.mode == "L"
        assert result.size == (5, 3)
        assert result.getpixel((0, 0)) == 255

    def test_monotonic_in_brightness(self):
        """Brighter greys give higher luminance."""
        dark = to_grayscale(Image.new("RGB", (1, 1), color=(40, 40, 40)))
        light = to_grayscale(Image.new("RGB", (1, 1), color=(200, 200, 200)))

        assert dark.getpixel((0, 0)) < light.getpixel((0, 0))

    def test_transparent_pixels_become_background(self):
        """Fully transparent black is treated as white."""
        image = Image.new("RGBA", (2, 1), color=(0, 0, 0, 0))
        image.load()[1, 0] = (0, 0, 0, 255)

        result = to_grayscale(image)

        assert result.getpixel((0, 0)) == 255
        assert result.getpixel((1, 0)) == 0

    def test_grayscale_input_copied(self):
        """Mode L input is returned as a new image."""
        image = Image.new("L", (2, 2), color=10)

        result = to_grayscale(image)

        assert result is not image
        assert result.getpixel((1, 1)) == 10

    def test_one_bit_input(self):
        """Mode 1 input is expanded to 0/255."""
        image = Image.new("1", (2, 1), color=1)
        image.load()[0, 0] = 0

        result = to_grayscale(image)

        assert result.getpixel((0, 0)) == 0
        assert result.getpixel((1, 0)) == 255

    def test_sixteen_bit_png_scaled(self, make_png):
        """A 16-bit grey PNG keeps its brightness instead of clipping to white."""
        png = make_png(Image.new("I;16", (8, 8), color=30000))

        result = to_grayscale(decode_image(png))

        assert result.mode == "L"
        assert abs(result.getpixel((0, 0)) - 30000 / 256) <= 1

    def test_sixteen_bit_relative_brightness(self):
        """Darker 16-bit greys stay darker after scaling."""
        dark = to_grayscale(Image.new("I;16", (1, 1), color=1000))
        light = to_grayscale(Image.new("I;16", (1, 1), color=60000))

        assert dark.getpixel((0, 0)) < 128 < light.getpixel((0, 0))

    def test_thirty_two_bit_integer_scaled(self):
        """Mode I is read as 16-bit intensities."""
        image = Image.new("I", (1, 1), color=65535)

        assert to_grayscale(image).getpixel((0, 0)) == 255

    def test_normalized_float_scaled(self):
        """Float rasters in 0.0-1.0 are stretched to 0-255."""
        image = Image.new("F", (2, 1), color=0.0)
        image.load()[1, 0] = 1.0

        result = to_grayscale(image)

        assert result.getpixel((0, 0)) == 0
        assert result.getpixel((1, 0)) == 255

    def test_palette_transparency_becomes_background(self):
        """Transparent palette entries are treated as white."""
        image = Image.new("P", (2, 1), color=0)
        image.putpalette([0, 0, 0, 0, 0, 0])
        image.info["transparency"] = 0
        image.load()[1, 0] = 1

        result = to_grayscale(image)

        assert result.getpixel((0, 0)) == 255
        assert result.getpixel((1, 0)) == 0

    def test_none_rejected(self):
        """A missing image is a decode error."""
        with pytest.raises(DecodeError) as exc_info:
            to_grayscale(None)

        assert exc_info.value.stage == "grayscale"

    def test_empty_image_rejected(self):
        """Zero sized images are rejected."""
        with pytest.raises(DecodeError):
            to_grayscale(Image.new("RGB", (0, 0)))


class TestResample:
    """Tests for stretching to label size."""

    def test_exact_size(self):
        """Output is exactly the resolved size, aspect ratio ignored."""
        image = Image.new("L", (300, 300), color=0)
        dimensions = resolve_dimensions(100)

        result = resample(image, dimensions)

        assert result.size == (104, 56)

    def test_upscale(self):
        """Small images are stretched up."""
        image = Image.new("L", (3, 2), color=0)

        result = resample(image, resolve_dimensions(560))

        assert result.size == (560, 280)
        assert result.getpixel((559, 279)) == 0

    def test_size_mismatch_detected(self, monkeypatch):
        """A resize that returns the wrong size is fatal."""
        image = Image.new("L", (10, 10))
        monkeypatch.setattr(image, "resize", lambda size, resample=None: Image.new("L", (1, 1)))

        with pytest.raises(DimensionMismatchError) as exc_info:
            resample(image, resolve_dimensions(16))

        assert exc_info.value.stage == "resample"
