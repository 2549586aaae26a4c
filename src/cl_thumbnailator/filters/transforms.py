"""Geometric filters: flips and rotations."""

from typing import ClassVar, override

from PIL import Image
from PIL.Image import Resampling, Transpose

from .base import ImageFilter


class Flip(ImageFilter):
    """Mirrors an image. Use ``Flip.HORIZONTAL`` or ``Flip.VERTICAL``."""

    HORIZONTAL: ClassVar["Flip"]
    VERTICAL: ClassVar["Flip"]

    def __init__(self, method: Transpose):
        if method not in (Transpose.FLIP_LEFT_RIGHT, Transpose.FLIP_TOP_BOTTOM):
            raise ValueError(f"Not a flip: {method!r}")
        self.method: Transpose = method

    @override
    def apply(self, image: Image.Image) -> Image.Image:
        return image.transpose(self.method)

    @override
    def __repr__(self) -> str:
        return "Flip.HORIZONTAL" if self.method == Transpose.FLIP_LEFT_RIGHT else "Flip.VERTICAL"


Flip.HORIZONTAL = Flip(Transpose.FLIP_LEFT_RIGHT)
Flip.VERTICAL = Flip(Transpose.FLIP_TOP_BOTTOM)


class Rotator(ImageFilter):
    """Rotates clockwise by ``angle`` degrees about the image center.

    The output is enlarged to hold the whole rotated image. Multiples of 90
    degrees are exact transposes; other angles are resampled bicubically and
    the uncovered corners are black, or transparent for alpha images.
    """

    _RIGHT_ANGLES: ClassVar[dict[int, Transpose]] = {
        90: Transpose.ROTATE_270,
        180: Transpose.ROTATE_180,
        270: Transpose.ROTATE_90,
    }

    def __init__(self, angle: float):
        self.angle: float = float(angle)

    @override
    def apply(self, image: Image.Image) -> Image.Image:
        normalized = self.angle % 360
        if normalized == 0:
            return image.copy()
        if normalized.is_integer() and int(normalized) in self._RIGHT_ANGLES:
            return image.transpose(self._RIGHT_ANGLES[int(normalized)])
        # Pillow rotates counter-clockwise
        return image.rotate(-self.angle, resample=Resampling.BICUBIC, expand=True)

    @override
    def __repr__(self) -> str:
        return f"Rotator({self.angle})"


class Rotation:
    """Factory and stock instances for rotation filters."""

    LEFT_90_DEGREES: ClassVar[Rotator] = Rotator(-90)
    RIGHT_90_DEGREES: ClassVar[Rotator] = Rotator(90)
    ROTATE_180_DEGREES: ClassVar[Rotator] = Rotator(180)

    @staticmethod
    def new_rotator(angle: float) -> Rotator:
        return Rotator(angle)
