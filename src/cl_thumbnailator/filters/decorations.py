"""Decorating filters: captions, transparency and watermarks."""

from typing import override

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..geometry import Position, Positions
from .base import ImageFilter

Color = str | tuple[int, int, int] | tuple[int, int, int, int]
Font = ImageFont.ImageFont | ImageFont.FreeTypeFont | ImageFont.TransposedFont


def _check_opacity(value: float, name: str) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"The {name} must be between 0.0 and 1.0, inclusive, got {value}")
    return float(value)


def _scale_alpha(image: Image.Image, factor: float) -> Image.Image:
    """Return an RGBA copy of ``image`` with its alpha channel multiplied by ``factor``."""
    result = image.convert("RGBA")
    alpha = result.getchannel("A").point(lambda v: round(v * factor))
    result.putalpha(alpha)
    return result


def _restore_mode(result: Image.Image, mode: str) -> Image.Image:
    return result if mode == "RGBA" else result.convert(mode)


class Caption(ImageFilter):
    """Draws ``caption`` on the image at ``position``, kept ``insets`` pixels from the edges."""

    def __init__(
        self,
        caption: str,
        font: Font,
        color: Color,
        position: Position = Positions.BOTTOM_CENTER,
        insets: int = 0,
        alpha: float = 1.0,
    ):
        if not caption:
            raise ValueError("Caption is null or empty.")
        if font is None:
            raise ValueError("Font is null.")
        if not color:
            raise ValueError("Color is null.")
        if position is None:
            raise ValueError("Position is null.")
        if insets < 0:
            raise ValueError("Inset is less than 0.")

        self.caption: str = caption
        self.font: Font = font
        self.position: Position = position
        self.insets: int = insets
        self.alpha: float = _check_opacity(alpha, "alpha")

        rgb = ImageColor.getrgb(color) if isinstance(color, str) else tuple(color)
        self._fill: tuple[int, int, int, int] = (
            rgb[0],
            rgb[1],
            rgb[2],
            round((rgb[3] if len(rgb) > 3 else 255) * self.alpha),
        )

    @override
    def apply(self, image: Image.Image) -> Image.Image:
        base = image.convert("RGBA")
        overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)

        left, top, right, bottom = draw.textbbox((0, 0), self.caption, font=self.font)
        x, y = self.position.calculate(
            base.width,
            base.height,
            right - left,
            bottom - top,
            self.insets,
            self.insets,
            self.insets,
            self.insets,
        )
        draw.text((x - left, y - top), self.caption, font=self.font, fill=self._fill)

        return _restore_mode(Image.alpha_composite(base, overlay), image.mode)


class Transparency(ImageFilter):
    """Makes the image translucent. The result is always RGBA."""

    def __init__(self, alpha: float):
        self.alpha: float = _check_opacity(alpha, "alpha")

    @override
    def apply(self, image: Image.Image) -> Image.Image:
        return _scale_alpha(image, self.alpha)


class Watermark(ImageFilter):
    """Composites ``image`` over the thumbnail at ``position`` with the given opacity.

    Parts of the watermark falling outside the thumbnail are clipped.
    """

    def __init__(self, position: Position, image: Image.Image, opacity: float):
        if position is None:
            raise ValueError("Position is null.")
        if image is None:
            raise ValueError("Watermark image is null.")
        self.position: Position = position
        self.image: Image.Image = image
        self.opacity: float = _check_opacity(opacity, "opacity")

    @override
    def apply(self, image: Image.Image) -> Image.Image:
        mark = _scale_alpha(self.image, self.opacity)
        x, y = self.position.calculate(image.width, image.height, mark.width, mark.height)

        base = image.convert("RGBA")
        overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
        overlay.paste(mark, (x, y))
        return _restore_mode(Image.alpha_composite(base, overlay), image.mode)
