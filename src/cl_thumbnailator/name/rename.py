"""Filename policies for batch thumbnail operations.

A rename policy is any callable taking ``(index, name, param)`` and returning
the name of the thumbnail for the ``index``-th source called ``name``.
"""

from collections.abc import Callable
from typing import ClassVar

from ..common.schemas import ThumbnailParameter

RenameFunction = Callable[[int, str, ThumbnailParameter | None], str]


def append_suffix(name: str, suffix: str) -> str:
    """Insert ``suffix`` before the extension of ``name``, if it has one."""
    dot = name.rfind(".")
    if dot == -1:
        return name + suffix
    return name[:dot] + suffix + name[dot:]


def with_prefix(prefix: str) -> RenameFunction:
    def rename(index: int, name: str, param: ThumbnailParameter | None = None) -> str:
        return prefix + name

    return rename


def with_suffix(suffix: str) -> RenameFunction:
    def rename(index: int, name: str, param: ThumbnailParameter | None = None) -> str:
        return append_suffix(name, suffix)

    return rename


def _no_change(index: int, name: str, param: ThumbnailParameter | None = None) -> str:
    return name


class Rename:
    """Stock rename policies.

    >>> Rename.PREFIX_DOT_THUMBNAIL(0, "photo.jpg", None)
    'thumbnail.photo.jpg'
    >>> Rename.SUFFIX_HYPHEN_THUMBNAIL(0, "photo.jpg", None)
    'photo-thumbnail.jpg'
    """

    NO_CHANGE: ClassVar[RenameFunction] = _no_change
    PREFIX_DOT_THUMBNAIL: ClassVar[RenameFunction] = with_prefix("thumbnail.")
    PREFIX_HYPHEN_THUMBNAIL: ClassVar[RenameFunction] = with_prefix("thumbnail-")
    SUFFIX_DOT_THUMBNAIL: ClassVar[RenameFunction] = with_suffix(".thumbnail")
    SUFFIX_HYPHEN_THUMBNAIL: ClassVar[RenameFunction] = with_suffix("-thumbnail")
