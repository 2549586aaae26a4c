"""Multi step resizers for large scale changes.

A single bilinear pass over a large reduction samples only a few source
pixels per destination pixel and aliases badly. ``ProgressiveBilinearResizer``
halves the image step by step instead. ``TileResizer`` bounds the memory of a
large downscale by resampling the source tile by tile.
"""

from typing import override

from loguru import logger
from PIL import Image
from PIL.Image import Resampling

from ..geometry import Dimension, round_half_up
from ..utils import blank
from .base import Resizer

DEFAULT_TILE_SIZE = 512


def _is_mild(source: tuple[int, int], target: tuple[int, int]) -> bool:
    return target[0] * 2 >= source[0] and target[1] * 2 >= source[1]


def progressive_resize(
    image: Image.Image, target: Dimension, resample: Resampling = Resampling.BILINEAR
) -> Image.Image:
    """Resample ``image`` to ``target`` by repeated halving."""
    if _is_mild(image.size, target):
        return image.resize(target, resample)

    start_w, start_h = target
    while start_w < image.width and start_h < image.height:
        start_w *= 2
        start_h *= 2

    current_w = max(start_w // 2, target.width)
    current_h = max(start_h // 2, target.height)
    step = image.resize((current_w, current_h), resample)
    passes = 1

    while current_w >= target.width * 2 and current_h >= target.height * 2:
        current_w = max(current_w // 2, target.width)
        current_h = max(current_h // 2, target.height)
        step = step.resize((current_w, current_h), resample)
        passes += 1

    if step.size != target:
        step = step.resize(target, resample)
        passes += 1

    logger.debug(f"Progressive resize {image.size} -> {tuple(target)} in {passes} passes")
    return step


class ProgressiveBilinearResizer(Resizer):
    @override
    def resize(self, image: Image.Image, size: Dimension) -> Image.Image:
        return progressive_resize(image, self._check(image, size))


def _tile_edges(length: int, tile: int, scale: float, target: int) -> list[tuple[int, int, int, int]]:
    """Split ``[0, length)`` into tiles and map each one onto ``[0, target)``.

    Returns ``(src_start, src_end, dst_start, dst_end)`` tuples. Consecutive
    destination spans share their edges and the last one ends at ``target``.
    """
    edges: list[tuple[int, int, int, int]] = []
    for start in range(0, length, tile):
        end = min(start + tile, length)
        dst_start = min(round_half_up(start * scale), target)
        dst_end = target if end == length else min(round_half_up(end * scale), target)
        edges.append((start, end, dst_start, dst_end))
    return edges


class TileResizer(Resizer):
    """Resizer that never resamples more than one source tile at a time.

    - Upscale on both axes: progressive path, which reduces to a single pass.
    - Scale change within 2x on both axes: single bilinear pass.
    - Otherwise: each ``tile_size`` square of the source is resampled into its
      proportional rectangle of the destination.
    """

    def __init__(self, tile_size: int = DEFAULT_TILE_SIZE):
        if tile_size <= 0:
            raise ValueError(f"Tile size must be positive, got {tile_size}")
        self.tile_size: int = tile_size

    @override
    def resize(self, image: Image.Image, size: Dimension) -> Image.Image:
        target = self._check(image, size)

        if target.width >= image.width and target.height >= image.height:
            return progressive_resize(image, target)
        if _is_mild(image.size, target):
            return image.resize(target, Resampling.BILINEAR)
        return self._resize_tiled(image, target)

    def _resize_tiled(self, image: Image.Image, target: Dimension) -> Image.Image:
        tile_w = min(image.width, self.tile_size)
        tile_h = min(image.height, self.tile_size)
        columns = _tile_edges(image.width, tile_w, target.width / image.width, target.width)
        rows = _tile_edges(image.height, tile_h, target.height / image.height, target.height)

        result = blank(image.mode, target)
        pasted = 0
        for src_top, src_bottom, dst_top, dst_bottom in rows:
            if dst_bottom <= dst_top:
                continue
            for src_left, src_right, dst_left, dst_right in columns:
                if dst_right <= dst_left:
                    continue
                tile = image.resize(
                    (dst_right - dst_left, dst_bottom - dst_top),
                    Resampling.BILINEAR,
                    box=(src_left, src_top, src_right, src_bottom),
                )
                result.paste(tile, (dst_left, dst_top))
                pasted += 1

        logger.debug(
            f"Tiled resize {image.size} -> {tuple(target)}: "
            f"{len(columns)}x{len(rows)} tiles, {pasted} pasted"
        )
        return result

    @override
    def __repr__(self) -> str:
        return f"TileResizer(tile_size={self.tile_size})"
