"""Maker producing thumbnails scaled by a factor."""

import math
from typing import Self, override

from ..common.errors import InvalidStateError
from ..geometry import Dimension, clamp_dimension
from .base import ThumbnailMaker


class ScaledThumbnailMaker(ThumbnailMaker):
    """Scales each side of the source by its factor.

    A single factor applies to both sides. Results are rounded half up and
    never smaller than one pixel.
    """

    def __init__(self, width_scale: float | None = None, height_scale: float | None = None):
        super().__init__()
        self._width_scale: float | None = None
        self._height_scale: float | None = None

        if width_scale is not None:
            _ = self.scale(width_scale, height_scale)
        elif height_scale is not None:
            raise ValueError("A height scale needs a width scale.")

    def scale(self, factor: float, height_factor: float | None = None) -> Self:
        if self._width_scale is not None:
            raise InvalidStateError("The scaling factor has already been set.")
        if height_factor is None:
            height_factor = factor
        for value in (factor, height_factor):
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"The scaling factor must be greater than 0, got {value}")
        self._width_scale = factor
        self._height_scale = height_factor
        return self

    @property
    @override
    def ready(self) -> bool:
        return self._width_scale is not None

    @override
    def calculate_size(self, width: int, height: int) -> Dimension:
        if self._width_scale is None or self._height_scale is None:
            raise InvalidStateError("ScaledThumbnailMaker has not been fully initialized.")
        return clamp_dimension(width * self._width_scale, height * self._height_scale)
