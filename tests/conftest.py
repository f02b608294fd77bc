"""Pytest configuration and fixtures."""

import io

import pytest
from PIL import Image


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def white_png() -> bytes:
    """A 300x200 all white RGB PNG."""
    return encode_png(Image.new("RGB", (300, 200), color="white"))


@pytest.fixture
def black_png() -> bytes:
    """A 40x20 all black RGB PNG."""
    return encode_png(Image.new("RGB", (40, 20), color="black"))


@pytest.fixture
def make_png():
    """Return a helper that encodes a PIL image as PNG bytes."""
    return encode_png
