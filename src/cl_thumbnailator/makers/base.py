"""Shared plumbing for thumbnail makers."""

from abc import ABC, abstractmethod
from typing import Self

from PIL import Image

from ..common.errors import InvalidStateError
from ..geometry import Dimension
from ..resizers import DefaultResizerFactory, FixedResizerFactory, Resizer, ResizerFactory


class ThumbnailMaker(ABC):
    """Computes a target size for an image and resamples the image to it.

    Subclasses decide the target size. The maker asks its resizer factory for
    a resizer suited to the scale change and converts the result to
    ``image_mode`` when one was set.
    """

    def __init__(self):
        self._resizer_factory: ResizerFactory = DefaultResizerFactory()
        self._image_mode: str | None = None

    def resizer_factory(self, factory: ResizerFactory) -> Self:
        if factory is None:
            raise ValueError("Resizer factory is null.")
        self._resizer_factory = factory
        return self

    def resizer(self, resizer: Resizer) -> Self:
        return self.resizer_factory(FixedResizerFactory(resizer))

    def image_mode(self, mode: str | None) -> Self:
        self._image_mode = mode
        return self

    @property
    @abstractmethod
    def ready(self) -> bool: ...

    @abstractmethod
    def calculate_size(self, width: int, height: int) -> Dimension:
        """Return the thumbnail size for a ``width`` x ``height`` source."""

    def make(self, image: Image.Image) -> Image.Image:
        if not self.ready:
            raise InvalidStateError(f"{type(self).__name__} has not been fully initialized.")

        return self.resize_to(image, self.calculate_size(image.width, image.height))

    def resize_to(self, image: Image.Image, target: Dimension) -> Image.Image:
        """Resample ``image`` to an already computed ``target`` size."""
        resizer = self._resizer_factory.get_resizer(Dimension(image.width, image.height), target)
        thumbnail = resizer.resize(image, target)

        if self._image_mode is not None and thumbnail.mode != self._image_mode:
            thumbnail = thumbnail.convert(self._image_mode)
        return thumbnail
