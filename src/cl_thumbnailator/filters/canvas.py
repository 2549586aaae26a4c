"""Places an image on a canvas of a fixed size."""

from typing import override

from PIL import Image

from ..geometry import Position, Positions
from ..utils import blank
from .base import ImageFilter


class Canvas(ImageFilter):
    """Puts the image on a ``width`` x ``height`` canvas at ``position``.

    Without ``crop`` the canvas grows on any side where the image is larger;
    with ``crop`` the output is exactly the canvas size and the image is
    clipped. The background is ``fill_color`` when given, otherwise
    transparent for images with alpha and black for the rest.
    """

    def __init__(
        self,
        width: int,
        height: int,
        position: Position = Positions.CENTER,
        crop: bool = False,
        fill_color: object = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        if position is None:
            raise ValueError("Position is null.")
        self.width: int = width
        self.height: int = height
        self.position: Position = position
        self.crop: bool = crop
        self.fill_color: object = fill_color

    @override
    def apply(self, image: Image.Image) -> Image.Image:
        if self.crop:
            width, height = self.width, self.height
        else:
            width = max(self.width, image.width)
            height = max(self.height, image.height)

        x, y = self.position.calculate(width, height, image.width, image.height)

        canvas = blank(image.mode, (width, height), self.fill_color)
        canvas.paste(image, (x, y))
        return canvas
