"""Anchor positions used to place one rectangle inside another."""

from enum import Enum
from typing import Protocol, runtime_checkable

from .dimension import Coordinate


@runtime_checkable
class Position(Protocol):
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
    ) -> Coordinate: ...


class Positions(Enum):
    """The nine canonical anchors.

    Each value is a ``(horizontal, vertical)`` pair where 0 is the leading
    edge, 1 the middle and 2 the trailing edge.
    """

    TOP_LEFT = (0, 0)
    TOP_CENTER = (1, 0)
    TOP_RIGHT = (2, 0)
    CENTER_LEFT = (0, 1)
    CENTER = (1, 1)
    CENTER_RIGHT = (2, 1)
    BOTTOM_LEFT = (0, 2)
    BOTTOM_CENTER = (1, 2)
    BOTTOM_RIGHT = (2, 2)

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
    ) -> Coordinate:
        horizontal, vertical = self.value
        x = _place(horizontal, enclosing_width, width, inset_left, inset_right)
        y = _place(vertical, enclosing_height, height, inset_top, inset_bottom)
        return Coordinate(x, y)


def _place(anchor: int, enclosing: int, inner: int, leading: int, trailing: int) -> int:
    if anchor == 0:
        return leading
    if anchor == 2:
        return enclosing - inner - trailing
    return enclosing // 2 - inner // 2
