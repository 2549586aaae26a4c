"""Single pass resizers."""

from typing import override

from PIL import Image
from PIL.Image import Resampling

from ..geometry import Dimension
from ..utils import blank
from .base import Resizer


class NullResizer(Resizer):
    """Does not resample.

    The top-left part of the source that fits is copied into a blank image of
    the target size, so equal sizes produce an exact copy.
    """

    @override
    def resize(self, image: Image.Image, size: Dimension) -> Image.Image:
        target = self._check(image, size)
        if image.size == target:
            return image.copy()

        result = blank(image.mode, target)
        overlap = (0, 0, min(image.width, target.width), min(image.height, target.height))
        result.paste(image.crop(overlap), (0, 0))
        return result


class DirectResizer(Resizer):
    """One Pillow resampling pass straight to the target size."""

    resample: Resampling = Resampling.BILINEAR

    @override
    def resize(self, image: Image.Image, size: Dimension) -> Image.Image:
        target = self._check(image, size)
        return image.resize(target, self.resample)


class BilinearResizer(DirectResizer):
    resample = Resampling.BILINEAR


class BicubicResizer(DirectResizer):
    resample = Resampling.BICUBIC


class LanczosResizer(DirectResizer):
    resample = Resampling.LANCZOS
