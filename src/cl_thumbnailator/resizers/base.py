"""Resizer interface."""

from abc import ABC, abstractmethod

from PIL import Image

from ..geometry import Dimension


class Resizer(ABC):
    """Resamples an image to an exact target size.

    Implementations return a new image and never modify the one passed in.
    """

    @abstractmethod
    def resize(self, image: Image.Image, size: Dimension) -> Image.Image: ...

    @staticmethod
    def _check(image: Image.Image, size: tuple[int, int]) -> Dimension:
        width, height = size
        if width <= 0 or height <= 0:
            raise ValueError(f"Target size must be positive, got {width}x{height}")
        if image.width <= 0 or image.height <= 0:
            raise ValueError("Source image is empty")
        return Dimension(width, height)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
