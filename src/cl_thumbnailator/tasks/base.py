"""Thumbnail tasks: one source, one destination, one parameter."""

from abc import ABC, abstractmethod
from enum import StrEnum
from pathlib import Path
from typing import IO, override

from loguru import logger
from PIL import Image

from ..codec import DraftSize
from ..common.schemas import OutputFormat, ThumbnailParameter
from .sinks import FileImageSink, ImageSink, OutputStreamImageSink
from .sources import FileImageSource, ImageSource, InputStreamImageSource


class TaskState(StrEnum):
    UNSTARTED = "unstarted"
    READ = "read"
    ORIENTATION = "orientation"
    CROP = "crop"
    SIZE_COMPUTE = "size_compute"
    RESIZE = "resize"
    FILTER_CHAIN = "filter_chain"
    WRITE = "write"
    DONE = "done"
    FAILED = "failed"


class ThumbnailTask(ABC):
    """Reads an image, and writes the thumbnail made from it.

    ``create_thumbnail`` drives the task and records its progress in ``state``.
    """

    def __init__(self, param: ThumbnailParameter):
        if param is None:
            raise ValueError("The parameter is null.")
        self.param: ThumbnailParameter = param
        self.state: TaskState = TaskState.UNSTARTED

    @abstractmethod
    def read(self, draft_size: DraftSize | None = None) -> Image.Image: ...

    @abstractmethod
    def write(self, image: Image.Image) -> None: ...

    @property
    @abstractmethod
    def source(self) -> object: ...

    @property
    @abstractmethod
    def destination(self) -> object: ...

    @property
    @abstractmethod
    def input_format_name(self) -> str | None: ...

    @property
    @abstractmethod
    def orientation(self) -> int | None: ...


class SourceSinkThumbnailTask(ThumbnailTask):
    """Task connecting an ``ImageSource`` to an ``ImageSink``.

    The output format is resolved when writing:

    - ``OutputFormat.DETERMINE``: the sink's preferred format;
    - ``OutputFormat.ORIGINAL``: the format the source was read in;
    - anything else is used as given.

    ``DETERMINE`` falls through to ``ORIGINAL`` when the sink has no
    preference.
    """

    def __init__(self, param: ThumbnailParameter, source: ImageSource, destination: ImageSink):
        super().__init__(param)
        if source is None:
            raise ValueError("ImageSource cannot be null.")
        if destination is None:
            raise ValueError("ImageSink cannot be null.")
        self._source: ImageSource = source
        self._destination: ImageSink = destination

    @override
    def read(self, draft_size: DraftSize | None = None) -> Image.Image:
        return self._source.read(draft_size)

    def resolve_output_format(self) -> str | None:
        format_name = self.param.output_format
        if format_name == OutputFormat.DETERMINE:
            format_name = self._destination.preferred_output_format_name()
        if format_name == OutputFormat.ORIGINAL:
            format_name = self._source.input_format_name
        return format_name

    @override
    def write(self, image: Image.Image) -> None:
        format_name = self.resolve_output_format()
        logger.debug(f"Output format {self.param.output_format!r} resolved to {format_name!r}")
        self._destination.output_format_name = format_name
        self._destination.write(image, self.param)

    @property
    @override
    def source(self) -> ImageSource:
        return self._source

    @property
    @override
    def destination(self) -> ImageSink:
        return self._destination

    @property
    @override
    def input_format_name(self) -> str | None:
        return self._source.input_format_name

    @property
    @override
    def orientation(self) -> int | None:
        return self._source.orientation


class FileThumbnailTask(SourceSinkThumbnailTask):
    """File to file task.

    Unless an explicit format is set, the destination's extension names the
    output format, or the input format when the destination has no
    extension.
    """

    def __init__(
        self,
        param: ThumbnailParameter,
        source_file: str | Path,
        destination_file: str | Path,
        allow_overwrite: bool = True,
    ):
        if source_file is None:
            raise ValueError("Input file cannot be null.")
        if destination_file is None:
            raise ValueError("Output file cannot be null.")
        super().__init__(
            param,
            FileImageSource(source_file),
            FileImageSink(destination_file, allow_overwrite=allow_overwrite),
        )

    @override
    def resolve_output_format(self) -> str | None:
        if self.param.output_format not in (OutputFormat.ORIGINAL, OutputFormat.DETERMINE):
            return self.param.output_format
        extension = Path(self.destination.sink).suffix.lstrip(".")
        return extension or self._source.input_format_name


class StreamThumbnailTask(SourceSinkThumbnailTask):
    """Stream to stream task. Neither stream is closed."""

    def __init__(self, param: ThumbnailParameter, input_stream: IO[bytes], output_stream: IO[bytes]):
        super().__init__(
            param, InputStreamImageSource(input_stream), OutputStreamImageSink(output_stream)
        )
