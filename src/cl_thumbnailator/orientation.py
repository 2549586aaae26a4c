"""EXIF orientation support.

EXIF orientation codes describe how the stored pixels must be transformed to
be displayed upright:

======  ===========================================
 code    transform applied to the stored image
======  ===========================================
 1       none
 2       flip horizontal
 3       rotate 180
 4       flip vertical
 5       rotate right 90, then flip horizontal
 6       rotate right 90
 7       rotate left 90, then flip horizontal
 8       rotate left 90
======  ===========================================
"""

from loguru import logger
from PIL import Image

from .filters import Flip, ImageFilter, Pipeline, Rotation

ORIENTATION_TAG = 0x0112

_INVERSE = {2: 2, 3: 3, 4: 4, 5: 5, 6: 8, 7: 7, 8: 6}


def orientation_filter(code: int | None) -> ImageFilter | None:
    """Return the filter that makes an image with orientation ``code`` upright.

    Returns None for code 1, None and anything outside 1..8.
    """
    if code == 2:
        return Flip.HORIZONTAL
    if code == 3:
        return Rotation.ROTATE_180_DEGREES
    if code == 4:
        return Flip.VERTICAL
    if code == 5:
        return Pipeline([Rotation.RIGHT_90_DEGREES, Flip.HORIZONTAL])
    if code == 6:
        return Rotation.RIGHT_90_DEGREES
    if code == 7:
        return Pipeline([Rotation.LEFT_90_DEGREES, Flip.HORIZONTAL])
    if code == 8:
        return Rotation.LEFT_90_DEGREES
    return None


def inverse_orientation_filter(code: int | None) -> ImageFilter | None:
    """Return the filter undoing ``orientation_filter(code)``."""
    if code not in _INVERSE:
        return None
    return orientation_filter(_INVERSE[code])


def swaps_dimensions(code: int | None) -> bool:
    """Whether making ``code`` upright exchanges width and height."""
    return code in (5, 6, 7, 8)


def normalize_orientation(value: object) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 8:
        return value
    return None


def read_orientation(image: Image.Image) -> int | None:
    """Read the EXIF orientation of a decoded image.

    Unreadable or malformed EXIF data is logged and treated as absent.
    """
    try:
        value = image.getexif().get(ORIENTATION_TAG)
    except (OSError, ValueError, SyntaxError) as e:
        logger.warning(f"Could not read EXIF orientation: {e}")
        return None

    orientation = normalize_orientation(value)
    if value is not None and orientation is None:
        logger.debug(f"Ignoring out of range EXIF orientation {value!r}")
    return orientation
