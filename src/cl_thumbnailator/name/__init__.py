"""Naming helpers for batch thumbnail output."""

from .numbered import ConsecutivelyNumberedFilenames
from .rename import Rename, RenameFunction, append_suffix, with_prefix, with_suffix

__all__ = [
    "ConsecutivelyNumberedFilenames",
    "Rename",
    "RenameFunction",
    "append_suffix",
    "with_prefix",
    "with_suffix",
]
