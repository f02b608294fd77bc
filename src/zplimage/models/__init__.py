"""Pydantic models for zplimage."""

from zplimage.models.graphic import GraphicField, LabelDimensions

__all__ = [
    "GraphicField",
    "LabelDimensions",
]
