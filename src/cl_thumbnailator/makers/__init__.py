"""Thumbnail makers: target size computation plus resampling."""

from .base import ThumbnailMaker
from .fixed import FixedSizeThumbnailMaker
from .scaled import ScaledThumbnailMaker

__all__ = ["FixedSizeThumbnailMaker", "ScaledThumbnailMaker", "ThumbnailMaker"]
