"""Geometry primitives: dimensions, anchor positions, sizes and regions."""

from .dimension import Coordinate, Dimension, Rectangle, clamp_dimension, round_half_up
from .positions import Position, Positions
from .region import AbsoluteSize, Region, RelativeSize, Size

__all__ = [
    "AbsoluteSize",
    "Coordinate",
    "Dimension",
    "Position",
    "Positions",
    "Rectangle",
    "Region",
    "RelativeSize",
    "Size",
    "clamp_dimension",
    "round_half_up",
]
