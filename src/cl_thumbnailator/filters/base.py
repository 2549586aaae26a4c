"""Filter interface and the ordered filter chain."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Self, override

from loguru import logger
from PIL import Image


class ImageFilter(ABC):
    """A transform applied to a thumbnail after resizing.

    ``apply`` returns a new image and leaves its argument untouched. The
    output may have a different size than the input.
    """

    @abstractmethod
    def apply(self, image: Image.Image) -> Image.Image: ...


class Pipeline(ImageFilter):
    """Applies a sequence of filters in order."""

    def __init__(self, filters: Iterable[ImageFilter] | None = None):
        self._filters: list[ImageFilter] = []
        if filters is not None:
            self.add_all(filters)

    def add(self, image_filter: ImageFilter) -> Self:
        if image_filter is None:
            raise ValueError("Filter is null.")
        self._filters.append(image_filter)
        return self

    def add_first(self, image_filter: ImageFilter) -> Self:
        if image_filter is None:
            raise ValueError("Filter is null.")
        self._filters.insert(0, image_filter)
        return self

    def add_all(self, filters: Iterable[ImageFilter]) -> Self:
        for image_filter in filters:
            self.add(image_filter)
        return self

    @property
    def filters(self) -> list[ImageFilter]:
        return list(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    @override
    def apply(self, image: Image.Image) -> Image.Image:
        if not self._filters:
            return image.copy()

        result = image
        for image_filter in self._filters:
            logger.debug(f"Applying {type(image_filter).__name__} to {result.size} {result.mode}")
            result = image_filter.apply(result)
        return result
