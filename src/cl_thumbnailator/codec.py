"""Image codec capability backed by Pillow.

Format names follow Pillow (``"JPEG"``, ``"PNG"``, ...). File extensions and
common aliases such as ``"jpg"`` are accepted wherever a format name is.
"""

from collections.abc import Callable
from pathlib import Path
from typing import IO

from loguru import logger
from PIL import Image, UnidentifiedImageError

from .common.errors import UnsupportedFormatError

# Formats whose encoder takes a ``quality`` option on a 0..100 scale
_QUALITY_FORMATS = frozenset({"JPEG", "WEBP"})

# Modes the JPEG encoder accepts
_JPEG_MODES = frozenset({"RGB", "L", "CMYK"})

# Decode size hint: a fixed size, or a function of the stored (width, height)
DraftSize = tuple[int, int] | Callable[[tuple[int, int]], tuple[int, int] | None]


def readable_formats() -> frozenset[str]:
    _ = Image.init()
    return frozenset(Image.OPEN)


def writable_formats() -> frozenset[str]:
    _ = Image.init()
    return frozenset(Image.SAVE)


def _lookup(name: str) -> str | None:
    _ = Image.init()
    key = name.strip().lstrip(".")
    if not key:
        return None
    by_extension = Image.registered_extensions().get(f".{key.lower()}")
    if by_extension is not None:
        return by_extension
    upper = key.upper()
    if upper in Image.OPEN or upper in Image.SAVE:
        return upper
    return None


def normalize_format_name(name: str | None) -> str:
    """Return Pillow's name for ``name``.

    Raises:
        UnsupportedFormatError: If Pillow knows no such format.
    """
    resolved = _lookup(name) if name else None
    if resolved is None:
        raise UnsupportedFormatError(name)
    return resolved


def format_from_path(path: str | Path) -> str | None:
    """Format implied by the extension of ``path``, or None."""
    suffix = Path(path).suffix
    if not suffix:
        return None
    return _lookup(suffix)


def is_writable(name: str | None) -> bool:
    if not name:
        return False
    resolved = _lookup(name)
    return resolved is not None and resolved in writable_formats()


def decode(fp: IO[bytes], draft_size: DraftSize | None = None) -> Image.Image:
    """Decode one image from a binary stream.

    The stream is left open. With ``draft_size``, JPEG data is decoded at the
    smallest reduced scale that still covers that size. A callable
    ``draft_size`` is given the stored size and may return None to decode
    at full size.

    Raises:
        UnsupportedFormatError: If the data is not in a format Pillow reads.
        OSError: If the data is truncated or corrupt, or reading fails.
    """
    try:
        image = Image.open(fp)
    except UnidentifiedImageError as e:
        raise UnsupportedFormatError(None, "No suitable image reader found for source data.") from e

    if draft_size is not None and image.format == "JPEG":
        original = image.size
        requested = draft_size(original) if callable(draft_size) else draft_size
        if requested is not None:
            _ = image.draft(image.mode, requested)
            logger.debug(f"Decoding JPEG {original} in draft mode at {image.size}")

    image.load()
    return image


def encode(
    image: Image.Image,
    fp: IO[bytes],
    format_name: str,
    quality: float | None = None,
) -> str:
    """Encode ``image`` to ``fp`` and return the Pillow format name used.

    ``quality`` ranges from 0.0 to 1.0 and only affects lossy formats.
    Alpha is dropped for formats that cannot store it.

    Raises:
        UnsupportedFormatError: If Pillow cannot write ``format_name``.
    """
    fmt = normalize_format_name(format_name)
    if fmt not in writable_formats():
        raise UnsupportedFormatError(format_name)

    if fmt == "JPEG" and image.mode not in _JPEG_MODES:
        image = image.convert("L" if image.mode in ("LA", "1", "I", "F") else "RGB")

    save_kwargs: dict[str, object] = {}
    if quality is not None and fmt in _QUALITY_FORMATS:
        save_kwargs["quality"] = round(quality * 100)

    logger.debug(f"Encoding {image.size} {image.mode} image as {fmt} {save_kwargs}")
    image.save(fp, format=fmt, **save_kwargs)
    return fmt
