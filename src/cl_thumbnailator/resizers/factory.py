"""Resizer registry and the policies that choose a resizer for a scale change."""

from abc import ABC, abstractmethod
from typing import override

from loguru import logger

from ..geometry import Dimension
from .base import Resizer
from .direct import BicubicResizer, BilinearResizer, LanczosResizer, NullResizer
from .progressive import ProgressiveBilinearResizer, TileResizer


class Resizers:
    """Shared, stateless resizer instances."""

    NULL: Resizer = NullResizer()
    BILINEAR: Resizer = BilinearResizer()
    BICUBIC: Resizer = BicubicResizer()
    LANCZOS: Resizer = LanczosResizer()
    PROGRESSIVE: Resizer = ProgressiveBilinearResizer()
    TILE: Resizer = TileResizer()


class ResizerFactory(ABC):
    @abstractmethod
    def get_resizer(
        self, source: Dimension | None = None, target: Dimension | None = None
    ) -> Resizer:
        """Return the resizer to use from ``source`` to ``target``.

        Called without sizes, returns the factory's default resizer.
        """


class DefaultResizerFactory(ResizerFactory):
    """Picks a resizer from the ratio between source and target.

    - Equal sizes: ``Resizers.NULL``.
    - Within a factor of two on both axes: ``Resizers.BILINEAR``.
    - Anything larger, up or down: ``Resizers.TILE``.
    """

    @override
    def get_resizer(
        self, source: Dimension | None = None, target: Dimension | None = None
    ) -> Resizer:
        if source is None or target is None:
            return Resizers.TILE

        if tuple(source) == tuple(target):
            resizer = Resizers.NULL
        elif all(t * 2 >= s and s * 2 >= t for s, t in zip(source, target)):
            resizer = Resizers.BILINEAR
        else:
            resizer = Resizers.TILE

        logger.debug(f"Resizer for {tuple(source)} -> {tuple(target)}: {resizer!r}")
        return resizer

    @override
    def __eq__(self, other: object) -> bool:
        return type(other) is DefaultResizerFactory

    @override
    def __hash__(self) -> int:
        return hash(DefaultResizerFactory)


class FixedResizerFactory(ResizerFactory):
    """Always returns the same resizer."""

    def __init__(self, resizer: Resizer):
        if resizer is None:
            raise ValueError("Resizer is null.")
        self.resizer: Resizer = resizer

    @override
    def get_resizer(
        self, source: Dimension | None = None, target: Dimension | None = None
    ) -> Resizer:
        return self.resizer

    @override
    def __repr__(self) -> str:
        return f"FixedResizerFactory({self.resizer!r})"
