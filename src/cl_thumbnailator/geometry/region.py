"""Sizes and regions used to select part of a source image."""

from typing import ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from .dimension import Coordinate, Dimension, Rectangle, clamp_dimension
from .positions import Position


@runtime_checkable
class Size(Protocol):
    def calculate(self, width: int, height: int) -> Dimension: ...


def _check_enclosing(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Width and height must be greater than 0, got {width}x{height}")


class AbsoluteSize(BaseModel):
    """A fixed size, independent of the enclosing object."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)

    def __init__(self, width: int, height: int, **data: object):
        super().__init__(width=width, height=height, **data)

    def calculate(self, width: int, height: int) -> Dimension:
        _check_enclosing(width, height)
        return Dimension(self.width, self.height)


class RelativeSize(BaseModel):
    """A size expressed as a fraction of the enclosing object."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    scaling_factor: float = Field(gt=0.0, le=1.0)

    def __init__(self, scaling_factor: float, **data: object):
        super().__init__(scaling_factor=scaling_factor, **data)

    def calculate(self, width: int, height: int) -> Dimension:
        _check_enclosing(width, height)
        return clamp_dimension(width * self.scaling_factor, height * self.scaling_factor)


class Region(BaseModel):
    """A rectangular region placed at ``position`` with the given ``size``.

    The region may extend past the image it is applied to; ``calculate``
    returns the part that actually overlaps.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    position: Position
    size: Size

    def __init__(self, position: Position, size: Size, **data: object):
        super().__init__(position=position, size=size, **data)

    @classmethod
    def of(cls, x: int, y: int, width: int, height: int) -> "Region":
        """Shortcut for an absolute region at ``(x, y)``."""
        return cls(Coordinate(x, y), AbsoluteSize(width, height))

    def calculate(self, outer_width: int, outer_height: int) -> Rectangle:
        """Return the intersection of this region with an ``outer_width`` x ``outer_height`` image.

        Raises:
            ValueError: If the region does not overlap the image at all.
        """
        width, height = self.size.calculate(outer_width, outer_height)
        x, y = self.position.calculate(outer_width, outer_height, width, height)

        left = max(0, x)
        top = max(0, y)
        right = min(outer_width, x + width)
        bottom = min(outer_height, y + height)

        if right <= left or bottom <= top:
            raise ValueError(
                f"Region ({x}, {y}, {width}x{height}) lies outside the "
                f"{outer_width}x{outer_height} image"
            )

        return Rectangle(left, top, right - left, bottom - top)
