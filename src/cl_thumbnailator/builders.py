"""Fluent interface for making thumbnails.

Example:
    One thumbnail, written next to the original::

        from cl_thumbnailator import Thumbnails

        Thumbnails.of("photo.jpg").size(160, 160).to_file("thumbnail.jpg")

    A batch, rotated and watermarked, written with a naming policy::

        from cl_thumbnailator import Positions, Rename, Thumbnails

        (
            Thumbnails.of("a.jpg", "b.jpg")
            .size(640, 480)
            .rotate(90)
            .watermark(logo, 0.5, Positions.BOTTOM_RIGHT)
            .output_quality(0.8)
            .to_files(Rename.PREFIX_DOT_THUMBNAIL)
        )
"""

from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum
from pathlib import Path
from typing import IO, Self

import httpx
from PIL import Image

from .codec import is_writable
from .common.config import ThumbnailatorSettings
from .common.errors import InsufficientDestinationsError, InvalidStateError
from .common.schemas import OutputFormat, ThumbnailParameter, ThumbnailParameterBuilder
from .filters import Canvas, ImageFilter, Rotation, Watermark
from .geometry import AbsoluteSize, Coordinate, Position, Positions, Rectangle, Region, Size
from .name import RenameFunction
from .resizers import Resizer, ResizerFactory
from .tasks import (
    FileImageSink,
    FileImageSource,
    ImageSink,
    ImageSource,
    InputStreamImageSource,
    OutputStreamImageSink,
    PilImageSink,
    PilImageSource,
    SourceSinkThumbnailTask,
    URLImageSource,
)
from .thumbnailator import create_thumbnail

# Stand-in for the unconstrained side when only a width or a height is given
_UNBOUNDED = 2**31 - 1


class _Property(StrEnum):
    SIZE = "size"
    WIDTH = "width"
    HEIGHT = "height"
    SCALE = "scale"
    KEEP_ASPECT_RATIO = "keep_aspect_ratio"
    CROP = "crop"
    SOURCE_REGION = "source_region"
    OUTPUT_FORMAT = "output_format"
    OUTPUT_QUALITY = "output_quality"
    IMAGE_MODE = "image_mode"
    RESIZER = "resizer"
    RESIZER_FACTORY = "resizer_factory"
    USE_EXIF_ORIENTATION = "use_exif_orientation"
    ALLOW_OVERWRITE = "allow_overwrite"
    SETTINGS = "settings"


def _to_region(args: tuple[object, ...]) -> Region:
    if len(args) == 1 and isinstance(args[0], Region):
        return args[0]
    if len(args) == 1 and isinstance(args[0], Rectangle):
        rect = args[0]
        return Region.of(rect.x, rect.y, rect.width, rect.height)
    if len(args) == 2 and isinstance(args[0], Position) and isinstance(args[1], Size):
        return Region(args[0], args[1])
    if (
        len(args) == 3
        and isinstance(args[0], Position)
        and isinstance(args[1], int)
        and isinstance(args[2], int)
    ):
        return Region(args[0], AbsoluteSize(args[1], args[2]))
    if len(args) == 4 and all(isinstance(arg, int) for arg in args):
        x, y, width, height = args
        return Region(Coordinate(x, y), AbsoluteSize(width, height))  # pyright: ignore[reportArgumentType]
    raise ValueError(f"Cannot make a source region from {args!r}")


# ─────────────────────────────────────────────────────────────
# Builder
# ─────────────────────────────────────────────────────────────


class Builder:
    """Collects thumbnail settings for a set of sources, then makes the thumbnails.

    Every setting can be given once; setting it again raises
    ``InvalidStateError``. A size (or a width or height) and a scale are
    mutually exclusive and one of them is required.
    """

    def __init__(self, sources: Iterable[ImageSource]):
        self._sources: list[ImageSource] = list(sources)
        self._set: set[_Property] = set()

        self._width: int | None = None
        self._height: int | None = None
        self._width_scale: float | None = None
        self._height_scale: float | None = None
        self._keep_aspect_ratio: bool = True
        self._crop_position: Position | None = None
        self._source_region: Region | None = None
        self._output_format: str = OutputFormat.DETERMINE
        self._output_quality: float | None = None
        self._image_mode: str | None = None
        self._resizer: Resizer | None = None
        self._resizer_factory: ResizerFactory | None = None
        self._use_exif_orientation: bool = True
        self._allow_overwrite: bool = True
        self._settings: ThumbnailatorSettings = ThumbnailatorSettings()
        self._filters: list[ImageFilter] = []
        self._apply_url_timeout()

    def _mark(self, prop: _Property) -> None:
        if prop in self._set:
            raise InvalidStateError(f"'{prop}' is already set.")
        self._set.add(prop)

    def _is_set(self, *props: _Property) -> bool:
        return any(prop in self._set for prop in props)

    # ── size ──────────────────────────────────────────────────

    def size(self, width: int, height: int) -> Self:
        if self._is_set(_Property.SCALE, _Property.WIDTH, _Property.HEIGHT):
            raise InvalidStateError("Cannot set the size when the scale, width or height is set.")
        self._mark(_Property.SIZE)
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be greater than 0.")
        self._width = width
        self._height = height
        return self

    def width(self, width: int) -> Self:
        if self._is_set(_Property.SCALE, _Property.SIZE):
            raise InvalidStateError("Cannot set the width when the scale or size is set.")
        if _Property.KEEP_ASPECT_RATIO in self._set and not self._keep_aspect_ratio:
            raise InvalidStateError("Cannot set the width when not keeping the aspect ratio.")
        self._mark(_Property.WIDTH)
        if width <= 0:
            raise ValueError("Width must be greater than 0.")
        self._width = width
        return self

    def height(self, height: int) -> Self:
        if self._is_set(_Property.SCALE, _Property.SIZE):
            raise InvalidStateError("Cannot set the height when the scale or size is set.")
        if _Property.KEEP_ASPECT_RATIO in self._set and not self._keep_aspect_ratio:
            raise InvalidStateError("Cannot set the height when not keeping the aspect ratio.")
        self._mark(_Property.HEIGHT)
        if height <= 0:
            raise ValueError("Height must be greater than 0.")
        self._height = height
        return self

    def force_size(self, width: int, height: int) -> Self:
        """Exactly ``width`` x ``height``, ignoring the aspect ratio."""
        _ = self.size(width, height)
        return self.keep_aspect_ratio(False)

    def scale(self, factor: float, height_factor: float | None = None) -> Self:
        if self._is_set(_Property.SIZE, _Property.WIDTH, _Property.HEIGHT):
            raise InvalidStateError("Cannot set the scale when the size, width or height is set.")
        if self._is_set(_Property.KEEP_ASPECT_RATIO):
            raise InvalidStateError("Cannot scale when the aspect ratio setting is set.")
        if self._is_set(_Property.CROP):
            raise InvalidStateError("Cannot scale when cropping.")
        self._mark(_Property.SCALE)
        if height_factor is None:
            height_factor = factor
        if factor <= 0 or height_factor <= 0:
            raise ValueError("The scaling factor is equal to or less than 0.")
        self._width_scale = factor
        self._height_scale = height_factor
        return self

    def keep_aspect_ratio(self, keep: bool) -> Self:
        if self._is_set(_Property.SCALE):
            raise InvalidStateError(
                "Cannot set whether to keep the aspect ratio when the scale is set."
            )
        if not self._is_set(_Property.SIZE, _Property.WIDTH, _Property.HEIGHT):
            raise InvalidStateError(
                "Cannot set whether to keep the aspect ratio unless the size is set."
            )
        if not keep and self._is_set(_Property.WIDTH, _Property.HEIGHT):
            raise InvalidStateError(
                "The aspect ratio must be kept when only the width or height is set."
            )
        if not keep and self._is_set(_Property.CROP):
            raise InvalidStateError("Cannot ignore the aspect ratio when cropping.")
        self._mark(_Property.KEEP_ASPECT_RATIO)
        self._keep_aspect_ratio = keep
        return self

    def crop(self, position: Position = Positions.CENTER) -> Self:
        """Cover the size box, then crop what sticks out, anchored at ``position``."""
        if position is None:
            raise ValueError("Position cannot be null.")
        if self._is_set(_Property.SCALE):
            raise InvalidStateError("Cannot crop when the scale is set.")
        if _Property.KEEP_ASPECT_RATIO in self._set and not self._keep_aspect_ratio:
            raise InvalidStateError("Cannot crop when not keeping the aspect ratio.")
        self._mark(_Property.CROP)
        self._crop_position = position
        return self

    # ── source region ─────────────────────────────────────────

    def source_region(self, *args: object) -> Self:
        """Make the thumbnail from part of each source.

        Accepts a ``Region``, a ``Rectangle``, ``(position, size)``,
        ``(position, width, height)`` or ``(x, y, width, height)``.
        """
        self._mark(_Property.SOURCE_REGION)
        self._source_region = _to_region(args)
        return self

    # ── output ────────────────────────────────────────────────

    def output_format(self, format_name: str) -> Self:
        self._mark(_Property.OUTPUT_FORMAT)
        if format_name in (OutputFormat.ORIGINAL, OutputFormat.DETERMINE):
            self._output_format = format_name
            return self
        if not is_writable(format_name):
            raise ValueError(f"Specified format is not supported: {format_name}")
        self._output_format = format_name
        return self

    def use_original_format(self) -> Self:
        return self.output_format(OutputFormat.ORIGINAL)

    def determine_output_format(self) -> Self:
        return self.output_format(OutputFormat.DETERMINE)

    def output_quality(self, quality: float) -> Self:
        self._mark(_Property.OUTPUT_QUALITY)
        if not 0.0 <= quality <= 1.0:
            raise ValueError("The quality setting must be in the range 0.0 and 1.0, inclusive.")
        self._output_quality = quality
        return self

    def image_mode(self, mode: str) -> Self:
        self._mark(_Property.IMAGE_MODE)
        self._image_mode = mode
        return self

    def allow_overwrite(self, allow: bool) -> Self:
        self._mark(_Property.ALLOW_OVERWRITE)
        self._allow_overwrite = allow
        return self

    # ── resampling ────────────────────────────────────────────

    def resizer(self, resizer: Resizer) -> Self:
        if resizer is None:
            raise ValueError("Resizer is null.")
        if self._is_set(_Property.RESIZER_FACTORY):
            raise InvalidStateError("Cannot set a resizer when a resizer factory is set.")
        self._mark(_Property.RESIZER)
        self._resizer = resizer
        return self

    def resizer_factory(self, factory: ResizerFactory) -> Self:
        if factory is None:
            raise ValueError("ResizerFactory is null.")
        if self._is_set(_Property.RESIZER):
            raise InvalidStateError("Cannot set a resizer factory when a resizer is set.")
        self._mark(_Property.RESIZER_FACTORY)
        self._resizer_factory = factory
        return self

    # ── filters ───────────────────────────────────────────────

    def rotate(self, angle: float) -> Self:
        """Rotate clockwise by ``angle`` degrees after resizing."""
        return self.add_filter(Rotation.new_rotator(angle))

    def watermark(
        self,
        watermark: Watermark | Image.Image,
        opacity: float = 0.5,
        position: Position = Positions.CENTER,
    ) -> Self:
        if isinstance(watermark, Watermark):
            return self.add_filter(watermark)
        return self.add_filter(Watermark(position, watermark, opacity))

    def add_filter(self, image_filter: ImageFilter) -> Self:
        if image_filter is None:
            raise ValueError("Filter is null.")
        self._filters.append(image_filter)
        return self

    def add_filters(self, filters: Iterable[ImageFilter]) -> Self:
        for image_filter in filters:
            _ = self.add_filter(image_filter)
        return self

    def use_exif_orientation(self, use: bool) -> Self:
        self._mark(_Property.USE_EXIF_ORIENTATION)
        self._use_exif_orientation = use
        return self

    def settings(self, settings: ThumbnailatorSettings) -> Self:
        self._mark(_Property.SETTINGS)
        self._settings = settings
        self._apply_url_timeout()
        return self

    def _apply_url_timeout(self) -> None:
        for source in self._sources:
            if isinstance(source, URLImageSource):
                source.timeout = self._settings.url_timeout

    # ── parameter ─────────────────────────────────────────────

    def _build_param(self) -> ThumbnailParameter:
        builder = ThumbnailParameterBuilder()

        if self._is_set(_Property.SCALE) and self._width_scale is not None:
            _ = builder.scale(self._width_scale, self._height_scale)
        elif self._width is not None and self._height is not None:
            _ = builder.size(self._width, self._height)
        elif self._width is not None:
            _ = builder.size(self._width, _UNBOUNDED)
        elif self._height is not None:
            _ = builder.size(_UNBOUNDED, self._height)
        else:
            raise InvalidStateError("Output size or scale has not been set.")

        filters = list(self._filters)
        if self._crop_position is not None:
            if self._width is None or self._height is None:
                raise InvalidStateError("Cropping needs both a width and a height.")
            filters.insert(0, Canvas(self._width, self._height, self._crop_position, crop=True))
            _ = builder.fit_within_dimensions(False)

        if self._resizer is not None:
            _ = builder.resizer(self._resizer)
        elif self._resizer_factory is not None:
            _ = builder.resizer_factory(self._resizer_factory)

        return (
            builder.keep_aspect_ratio(self._keep_aspect_ratio)
            .region(self._source_region)
            .output_format(self._output_format)
            .output_quality(self._output_quality)
            .image_mode(self._image_mode)
            .filters(filters)
            .use_orientation(self._use_exif_orientation)
            .build()
        )

    def _make(self, param: ThumbnailParameter, source: ImageSource, sink: ImageSink) -> None:
        create_thumbnail(SourceSinkThumbnailTask(param, source, sink), self._settings)

    def _single_source(self) -> ImageSource:
        if len(self._sources) > 1:
            raise ValueError("Cannot create one thumbnail from multiple original images.")
        return self._sources[0]

    def _file_sources(self) -> list[FileImageSource]:
        sources: list[FileImageSource] = []
        for source in self._sources:
            if not isinstance(source, FileImageSource):
                raise InvalidStateError(
                    "Cannot create thumbnails to files if original images are not from files."
                )
            sources.append(source)
        return sources

    # ── in-memory results ─────────────────────────────────────

    def iter_images(self) -> Iterator[Image.Image]:
        """Make thumbnails lazily, one per source."""
        param = self._build_param()
        for source in self._sources:
            sink = PilImageSink()
            self._make(param, source, sink)
            yield sink.sink

    def as_images(self) -> list[Image.Image]:
        return list(self.iter_images())

    def as_image(self) -> Image.Image:
        source = self._single_source()
        sink = PilImageSink()
        self._make(self._build_param(), source, sink)
        return sink.sink

    # ── files ─────────────────────────────────────────────────

    def to_file(self, path: str | Path) -> Path:
        """Write the single thumbnail to ``path``; returns the path actually written."""
        if path is None:
            raise ValueError("File cannot be null.")
        source = self._single_source()
        sink = FileImageSink(path, allow_overwrite=self._allow_overwrite)
        self._make(self._build_param(), source, sink)
        return sink.sink

    def as_files(
        self,
        destinations: Iterable[str | Path] | RenameFunction,
        directory: str | Path | None = None,
    ) -> list[Path]:
        """Write one thumbnail per source and return the paths written.

        ``destinations`` is either a sequence of paths, consumed in order, or
        a rename policy applied to each source filename. Renamed thumbnails go
        next to their source, or into ``directory`` when given.

        Raises:
            InsufficientDestinationsError: When the sequence of paths runs
                out; thumbnails for earlier sources have been written.
            ValueError: When ``destinations`` is a single path.
        """
        if isinstance(destinations, (str, Path)):
            raise ValueError(
                f"Expected a sequence of destinations, got the single path {destinations!r}; "
                "use to_file for one thumbnail."
            )
        param = self._build_param()
        if callable(destinations):
            return self._write_renamed(param, destinations, directory)

        if directory is not None:
            raise ValueError("A directory can only be combined with a rename policy.")

        written: list[Path] = []
        targets = iter(destinations)
        for index, source in enumerate(self._sources):
            try:
                target = next(targets)
            except StopIteration:
                raise InsufficientDestinationsError(index) from None
            sink = FileImageSink(target, allow_overwrite=self._allow_overwrite)
            self._make(param, source, sink)
            written.append(sink.sink)
        return written

    def _write_renamed(
        self,
        param: ThumbnailParameter,
        rename: Callable[[int, str, ThumbnailParameter | None], str],
        directory: str | Path | None,
    ) -> list[Path]:
        if directory is not None and not Path(directory).is_dir():
            raise NotADirectoryError(f"Given destination is not a directory: {directory}")

        written: list[Path] = []
        for index, source in enumerate(self._file_sources()):
            parent = Path(directory) if directory is not None else source.path.parent
            sink = FileImageSink(
                parent / rename(index, source.path.name, param),
                allow_overwrite=self._allow_overwrite,
            )
            self._make(param, source, sink)
            written.append(sink.sink)
        return written

    def to_files(
        self,
        destinations: Iterable[str | Path] | RenameFunction,
        directory: str | Path | None = None,
    ) -> None:
        """Like ``as_files``, without collecting the paths."""
        _ = self.as_files(destinations, directory)

    # ── streams ───────────────────────────────────────────────

    def to_output_stream(self, stream: IO[bytes]) -> None:
        """Write the single thumbnail to ``stream``, which is left open."""
        if stream is None:
            raise ValueError("OutputStream cannot be null.")
        source = self._single_source()
        self._make(self._build_param(), source, OutputStreamImageSink(stream))

    def to_output_streams(self, streams: Iterable[IO[bytes]]) -> None:
        """Write one thumbnail per source to ``streams``, consumed in order."""
        if streams is None:
            raise ValueError("OutputStream iterable is null.")
        param = self._build_param()
        targets = iter(streams)
        for index, source in enumerate(self._sources):
            try:
                stream = next(targets)
            except StopIteration:
                raise InsufficientDestinationsError(index) from None
            self._make(param, source, OutputStreamImageSink(stream))


# ─────────────────────────────────────────────────────────────
# Entry points
# ─────────────────────────────────────────────────────────────


def _non_empty(sources: list[ImageSource], kind: str) -> list[ImageSource]:
    if not sources:
        raise ValueError(f"Cannot create thumbnails for zero {kind}.")
    return sources


def _to_source(item: object) -> ImageSource:
    if isinstance(item, ImageSource):
        return item
    if isinstance(item, (str, Path)):
        return FileImageSource(item)
    if isinstance(item, Image.Image):
        return PilImageSource(item)
    if hasattr(item, "read"):
        return InputStreamImageSource(item)  # pyright: ignore[reportArgumentType]
    raise ValueError(f"Cannot read an image from {type(item).__name__}")


class Thumbnails:
    """Entry points of the fluent interface."""

    @staticmethod
    def of(*sources: str | Path | Image.Image | IO[bytes] | ImageSource) -> Builder:
        """Builder for filenames, paths, Pillow images, binary streams or image sources."""
        for source in sources:
            if source is None:
                raise ValueError("Cannot specify null for input images.")
        return Builder(_non_empty([_to_source(s) for s in sources], "images"))

    @staticmethod
    def from_files(files: Iterable[str | Path]) -> Builder:
        if files is None:
            raise ValueError("Cannot specify null for input files.")
        return Builder(_non_empty([FileImageSource(f) for f in files], "files"))

    @staticmethod
    def from_filenames(filenames: Iterable[str]) -> Builder:
        if filenames is None:
            raise ValueError("Cannot specify null for input filenames.")
        return Builder(_non_empty([FileImageSource(f) for f in filenames], "files"))

    @staticmethod
    def from_urls(urls: Iterable[str], client: httpx.Client | None = None) -> Builder:
        """Builder for URLs, optionally fetched through ``client``.

        The download timeout comes from the builder's settings.
        """
        if urls is None:
            raise ValueError("Cannot specify null for input URLs.")
        return Builder(_non_empty([URLImageSource(u, client=client) for u in urls], "URLs"))

    @staticmethod
    def from_input_streams(streams: Iterable[IO[bytes]]) -> Builder:
        if streams is None:
            raise ValueError("Cannot specify null for InputStreams.")
        return Builder(_non_empty([InputStreamImageSource(s) for s in streams], "InputStreams"))

    @staticmethod
    def from_images(images: Iterable[Image.Image]) -> Builder:
        if images is None:
            raise ValueError("Cannot specify null for images.")
        return Builder(_non_empty([PilImageSource(i) for i in images], "images"))

    @staticmethod
    def from_image_sources(sources: Iterable[ImageSource]) -> Builder:
        if sources is None:
            raise ValueError("Cannot specify null for image sources.")
        return Builder(_non_empty(list(sources), "image sources"))
