"""Maker producing thumbnails of a requested size."""

from typing import Self, override

from ..common.errors import InvalidStateError
from ..geometry import Dimension, clamp_dimension
from .base import ThumbnailMaker


class FixedSizeThumbnailMaker(ThumbnailMaker):
    """Makes thumbnails that fit a ``width`` x ``height`` box.

    ``size`` and ``keep_aspect_ratio`` must be set before ``make`` is called,
    either here or through the setters, and each only once.
    ``fit_within_dimensions`` defaults to True.

    With ``keep_aspect_ratio`` the source ratio is preserved: when fitting
    within the box the more constraining side decides the size, otherwise the
    thumbnail covers the box and may extend past it on one side.
    """

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        keep_aspect_ratio: bool | None = None,
        fit_within_dimensions: bool | None = None,
    ):
        super().__init__()
        self._width: int | None = None
        self._height: int | None = None
        self._keep_aspect_ratio: bool | None = None
        self._fit_within_dimensions: bool | None = None

        if width is not None or height is not None:
            if width is None or height is None:
                raise ValueError("Both width and height must be given.")
            _ = self.size(width, height)
        if keep_aspect_ratio is not None:
            _ = self.keep_aspect_ratio(keep_aspect_ratio)
        if fit_within_dimensions is not None:
            _ = self.fit_within_dimensions(fit_within_dimensions)

    def size(self, width: int, height: int) -> Self:
        if self._width is not None:
            raise InvalidStateError("The thumbnail size has already been set.")
        if width <= 0 or height <= 0:
            raise ValueError(f"Width and height must be greater than 0, got {width}x{height}")
        self._width = width
        self._height = height
        return self

    def keep_aspect_ratio(self, keep: bool) -> Self:
        if self._keep_aspect_ratio is not None:
            raise InvalidStateError("Whether to keep the aspect ratio has already been set.")
        self._keep_aspect_ratio = keep
        return self

    def fit_within_dimensions(self, fit: bool) -> Self:
        if self._fit_within_dimensions is not None:
            raise InvalidStateError("Whether to fit within dimensions has already been set.")
        self._fit_within_dimensions = fit
        return self

    @property
    @override
    def ready(self) -> bool:
        return self._width is not None and self._keep_aspect_ratio is not None

    @override
    def calculate_size(self, width: int, height: int) -> Dimension:
        if not self.ready or self._width is None or self._height is None:
            raise InvalidStateError("FixedSizeThumbnailMaker has not been fully initialized.")

        target_w: float = self._width
        target_h: float = self._height

        if self._keep_aspect_ratio:
            fit_within = self._fit_within_dimensions is not False
            source_ratio = width / height
            target_ratio = self._width / self._height

            if source_ratio > target_ratio:
                if fit_within:
                    target_h = self._width / source_ratio
                else:
                    target_w = self._height * source_ratio
            elif source_ratio < target_ratio:
                if fit_within:
                    target_w = self._height * source_ratio
                else:
                    target_h = self._width / source_ratio

        return clamp_dimension(target_w, target_h)
