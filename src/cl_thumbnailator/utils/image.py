"""Small Pillow helpers shared by resizers, filters and tasks."""

from PIL import Image

_ALPHA_MODES = frozenset({"RGBA", "RGBa", "LA", "La", "PA"})


def has_alpha(image: Image.Image) -> bool:
    if image.mode in _ALPHA_MODES:
        return True
    return image.mode == "P" and "transparency" in image.info


def normalize_mode(image: Image.Image) -> Image.Image:
    """Convert palette, bilevel and CMYK images to a mode Pillow can interpolate.

    Images already in a suitable mode are returned as is.
    """
    if image.mode in ("P", "PA"):
        return image.convert("RGBA" if has_alpha(image) else "RGB")
    if image.mode == "1":
        return image.convert("L")
    if image.mode == "CMYK":
        return image.convert("RGB")
    if image.mode.startswith("I;16"):
        return image.convert("I")
    return image


def blank(mode: str, size: tuple[int, int], fill: object = None) -> Image.Image:
    """A new image of ``size``.

    Without ``fill`` it is black, or fully transparent for alpha modes.
    """
    if fill is None:
        return Image.new(mode, size)
    return Image.new(mode, size, fill)
