"""Plain value types for sizes and points."""

import math
from typing import NamedTuple


class Dimension(NamedTuple):
    width: int
    height: int


class Coordinate(NamedTuple):
    """An absolute point; usable wherever a ``Position`` is expected."""

    x: int
    y: int

    def calculate(
        self,
        enclosing_width: int,
        enclosing_height: int,
        width: int,
        height: int,
        inset_left: int = 0,
        inset_right: int = 0,
        inset_top: int = 0,
        inset_bottom: int = 0,
    ) -> "Coordinate":
        return self


class Rectangle(NamedTuple):
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Pillow style ``(left, upper, right, lower)`` box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def size(self) -> Dimension:
        return Dimension(self.width, self.height)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (``2.5 -> 3``)."""
    return int(math.floor(value + 0.5))


def clamp_dimension(width: float, height: float) -> Dimension:
    """Round both components and clamp each to a minimum of 1."""
    return Dimension(max(1, round_half_up(width)), max(1, round_half_up(height)))
