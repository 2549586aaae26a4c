"""Resampling strategies and the factories that select them."""

from .base import Resizer
from .direct import BicubicResizer, BilinearResizer, DirectResizer, LanczosResizer, NullResizer
from .factory import DefaultResizerFactory, FixedResizerFactory, ResizerFactory, Resizers
from .progressive import ProgressiveBilinearResizer, TileResizer, progressive_resize

__all__ = [
    "BicubicResizer",
    "BilinearResizer",
    "DefaultResizerFactory",
    "DirectResizer",
    "FixedResizerFactory",
    "LanczosResizer",
    "NullResizer",
    "ProgressiveBilinearResizer",
    "Resizer",
    "ResizerFactory",
    "Resizers",
    "TileResizer",
    "progressive_resize",
]
