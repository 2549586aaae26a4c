"""Running thumbnail tasks, plus one-call helpers for common cases.

Example:
    Make a 200x200 thumbnail of a file::

        from cl_thumbnailator import create_thumbnail_file

        create_thumbnail_file("photo.jpg", "thumb.jpg", 200, 200)

    Thumbnails of several files, written next to them::

        from cl_thumbnailator import Rename, create_thumbnails

        create_thumbnails(["a.jpg", "b.png"], Rename.PREFIX_DOT_THUMBNAIL, 100, 100)
"""

from collections.abc import Iterable
from pathlib import Path
from typing import IO

from loguru import logger
from PIL import Image

from .common.config import ThumbnailatorSettings
from .common.schemas import OutputFormat, ThumbnailParameter, ThumbnailParameterBuilder
from .filters import Pipeline
from .makers import FixedSizeThumbnailMaker, ScaledThumbnailMaker, ThumbnailMaker
from .name import RenameFunction
from .orientation import orientation_filter, swaps_dimensions
from .tasks import (
    FileImageSource,
    FileThumbnailTask,
    PilImageSink,
    PilImageSource,
    SourceSinkThumbnailTask,
    StreamThumbnailTask,
    TaskState,
    ThumbnailTask,
)
from .utils import normalize_mode, timed


def make_thumbnail_maker(param: ThumbnailParameter) -> ThumbnailMaker:
    """Return the maker configured by ``param``."""
    maker: ThumbnailMaker
    if param.width_scale is not None:
        maker = ScaledThumbnailMaker(param.width_scale, param.height_scale)
    elif param.size is not None:
        maker = FixedSizeThumbnailMaker(
            param.size.width,
            param.size.height,
            param.keep_aspect_ratio,
            param.fit_within_dimensions,
        )
    else:
        raise ValueError("The parameter has neither size nor scale.")
    return maker.resizer_factory(param.resizer_factory).image_mode(param.image_mode)


class _DraftHint:
    """Decode size hint for the conserve memory workaround.

    Given the stored size of the source, asks for twice the larger side of
    the thumbnail in both directions, so that either orientation of the
    source still covers it. The stored size is kept in ``full_size`` so the
    thumbnail can be sized as if the source had been decoded in full.
    """

    def __init__(self, maker: ThumbnailMaker):
        self._maker: ThumbnailMaker = maker
        self.full_size: tuple[int, int] | None = None

    def __call__(self, size: tuple[int, int]) -> tuple[int, int]:
        self.full_size = size
        width, height = size
        upright = self._maker.calculate_size(width, height)
        turned = self._maker.calculate_size(height, width)
        side = 2 * max(*upright, *turned)
        return (side, side)


def _draft_hint(param: ThumbnailParameter, settings: ThumbnailatorSettings) -> _DraftHint | None:
    if not settings.conserve_memory_workaround or param.source_region is not None:
        return None
    return _DraftHint(make_thumbnail_maker(param))


@timed
def create_thumbnail(task: ThumbnailTask, settings: ThumbnailatorSettings | None = None) -> None:
    """Run ``task``: read, orient, crop, resize, filter and write.

    Any failure sets ``task.state`` to ``TaskState.FAILED`` and propagates.

    Raises:
        ValueError: If ``task`` is None.
        UnsupportedFormatError: If the source or destination format is not supported.
        OSError: If reading or writing fails.
    """
    if task is None:
        raise ValueError("The task is null.")
    settings = settings or ThumbnailatorSettings()
    param = task.param

    try:
        task.state = TaskState.READ
        hint = _draft_hint(param, settings)
        image = normalize_mode(task.read(hint))

        if param.use_orientation:
            task.state = TaskState.ORIENTATION
            orient = orientation_filter(task.orientation)
            if orient is not None:
                image = orient.apply(image)

        if param.source_region is not None:
            task.state = TaskState.CROP
            rectangle = param.source_region.calculate(image.width, image.height)
            image = image.crop(rectangle.box)

        task.state = TaskState.SIZE_COMPUTE
        maker = make_thumbnail_maker(param)
        width, height = image.size
        if hint is not None and hint.full_size is not None:
            # Drafted decodes are smaller than the source; size from the source
            width, height = hint.full_size
            if param.use_orientation and swaps_dimensions(task.orientation):
                width, height = height, width
        target = maker.calculate_size(width, height)

        task.state = TaskState.RESIZE
        thumbnail = maker.resize_to(image, target)

        task.state = TaskState.FILTER_CHAIN
        thumbnail = Pipeline(param.filters).apply(thumbnail)

        task.state = TaskState.WRITE
        task.write(thumbnail)
    except Exception as e:
        logger.error(f"Thumbnail task failed in state {task.state}: {e}")
        task.state = TaskState.FAILED
        raise

    task.state = TaskState.DONE


# ─────────────────────────────────────────────────────────────
# One-call helpers
# ─────────────────────────────────────────────────────────────


def _sized_param(width: int, height: int, output_format: str = OutputFormat.ORIGINAL) -> ThumbnailParameter:
    return ThumbnailParameterBuilder().size(width, height).output_format(output_format).build()


def create_thumbnail_from_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Thumbnail of an in-memory image, fitting within ``width`` x ``height``."""
    if image is None:
        raise ValueError("Image cannot be null.")
    sink = PilImageSink()
    create_thumbnail(SourceSinkThumbnailTask(_sized_param(width, height), PilImageSource(image), sink))
    return sink.sink


def create_thumbnail_from_file(path: str | Path, width: int, height: int) -> Image.Image:
    """Thumbnail of an image file, returned in memory."""
    if path is None:
        raise ValueError("Input file cannot be null.")
    sink = PilImageSink()
    create_thumbnail(SourceSinkThumbnailTask(_sized_param(width, height), FileImageSource(path), sink))
    return sink.sink


def create_thumbnail_file(
    input_file: str | Path, output_file: str | Path, width: int, height: int
) -> None:
    """Write a thumbnail of ``input_file`` to ``output_file``.

    The output format follows the extension of ``output_file``.
    """
    create_thumbnail(FileThumbnailTask(_sized_param(width, height), input_file, output_file))


def create_thumbnail_stream(
    input_stream: IO[bytes],
    output_stream: IO[bytes],
    width: int,
    height: int,
    format_name: str = OutputFormat.ORIGINAL,
) -> None:
    """Read an image from ``input_stream`` and write its thumbnail to ``output_stream``.

    Without ``format_name`` the thumbnail is written in the input's format.
    Neither stream is closed.
    """
    param = _sized_param(width, height, format_name)
    create_thumbnail(StreamThumbnailTask(param, input_stream, output_stream))


def _check_batch(files: Iterable[str | Path], rename: RenameFunction) -> None:
    if files is None:
        raise ValueError("Collection of files is null.")
    if rename is None:
        raise ValueError("Rename is null.")


def create_thumbnails_as_collection(
    files: Iterable[str | Path],
    rename: RenameFunction,
    width: int,
    height: int,
) -> list[Path]:
    """Write thumbnails next to each of ``files`` and return their paths.

    Files are processed in order and the first failure stops the batch.
    """
    _check_batch(files, rename)
    param = _sized_param(width, height)

    written: list[Path] = []
    for index, file in enumerate(files):
        file = Path(file)
        destination = file.parent / rename(index, file.name, param)
        task = FileThumbnailTask(param, file, destination)
        create_thumbnail(task)
        written.append(task.destination.sink)
    return written


def create_thumbnails(
    files: Iterable[str | Path],
    rename: RenameFunction,
    width: int,
    height: int,
) -> None:
    """Like ``create_thumbnails_as_collection``, without collecting the paths."""
    _ = create_thumbnails_as_collection(files, rename, width, height)
