"""Filters applied to thumbnails after resizing."""

from .base import ImageFilter, Pipeline
from .canvas import Canvas
from .decorations import Caption, Transparency, Watermark
from .transforms import Flip, Rotation, Rotator

__all__ = [
    "Canvas",
    "Caption",
    "Flip",
    "ImageFilter",
    "Pipeline",
    "Rotation",
    "Rotator",
    "Transparency",
    "Watermark",
]
