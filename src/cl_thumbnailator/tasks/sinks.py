"""Image sinks: where a thumbnail task writes its result."""

import os
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, override

from loguru import logger
from PIL import Image

from ..codec import encode, format_from_path, is_writable, normalize_format_name
from ..common.errors import DestinationExistsError, InvalidStateError, UnsupportedFormatError
from ..common.schemas import OutputFormat, ThumbnailParameter


class ImageSink(ABC):
    """Destination of a thumbnail.

    The task resolves the output format before writing and stores it in
    ``output_format_name``. ``None`` or ``OutputFormat.ORIGINAL`` there means
    no explicit format, and the sink falls back to what it can infer itself.
    """

    def __init__(self):
        self._output_format_name: str | None = None

    @property
    def output_format_name(self) -> str | None:
        return self._output_format_name

    @output_format_name.setter
    def output_format_name(self, format_name: str | None) -> None:
        self._output_format_name = format_name

    def preferred_output_format_name(self) -> str:
        """Format this sink would pick on its own, or ``OutputFormat.ORIGINAL``."""
        return OutputFormat.ORIGINAL

    @property
    @abstractmethod
    def sink(self) -> object: ...

    @abstractmethod
    def write(self, image: Image.Image, param: ThumbnailParameter | None = None) -> None: ...

    def _explicit_format(self) -> str | None:
        name = self._output_format_name
        if name is None or name == OutputFormat.ORIGINAL:
            return None
        return name


class FileImageSink(ImageSink):
    """Writes to a file.

    Without an explicit format the file extension decides. When the explicit
    format differs from the one the extension implies, the format name is
    appended to the filename (``test.png`` written as JPEG becomes
    ``test.png.JPEG``); ``sink`` reports the path actually written.

    The image is encoded into a temporary file next to the destination and
    moved into place once complete.
    """

    def __init__(self, path: str | Path, allow_overwrite: bool = True):
        super().__init__()
        if path is None:
            raise ValueError("File cannot be null.")
        self.path: Path = Path(path)
        self.allow_overwrite: bool = allow_overwrite

    @property
    @override
    def sink(self) -> Path:
        return self.path

    def _extension_format(self) -> str | None:
        fmt = format_from_path(self.path)
        return fmt if fmt is not None and is_writable(fmt) else None

    @override
    def preferred_output_format_name(self) -> str:
        return self._extension_format() or OutputFormat.ORIGINAL

    def _resolve(self) -> tuple[Path, str]:
        requested = self._explicit_format()
        extension_format = self._extension_format()

        if requested is None:
            if extension_format is None:
                raise UnsupportedFormatError(
                    self.path.suffix or None, "Could not determine output format."
                )
            return self.path, extension_format

        fmt = normalize_format_name(requested)
        if fmt == extension_format:
            return self.path, fmt
        return self.path.with_name(f"{self.path.name}.{requested}"), fmt

    @override
    def write(self, image: Image.Image, param: ThumbnailParameter | None = None) -> None:
        if image is None:
            raise ValueError("Cannot write a null image.")

        destination, fmt = self._resolve()
        if not self.allow_overwrite and destination.exists():
            raise DestinationExistsError(destination)

        quality = param.output_quality if param is not None else None
        temp_path = destination.with_name(f".{destination.name}.{uuid.uuid4().hex}.tmp")
        try:
            with open(temp_path, "xb") as fp:
                _ = encode(image, fp, fmt, quality)
            os.replace(temp_path, destination)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

        self.path = destination
        logger.debug(f"Wrote {fmt} thumbnail to {destination}")


class OutputStreamImageSink(ImageSink):
    """Writes to a binary stream, which is left open.

    A stream has no name to infer a format from, so the format must be
    resolved before writing.
    """

    def __init__(self, stream: IO[bytes]):
        super().__init__()
        if stream is None:
            raise ValueError("OutputStream cannot be null.")
        self.stream: IO[bytes] = stream

    @property
    @override
    def sink(self) -> IO[bytes]:
        return self.stream

    @override
    def write(self, image: Image.Image, param: ThumbnailParameter | None = None) -> None:
        if image is None:
            raise ValueError("Cannot write a null image.")

        requested = self._explicit_format()
        if requested is None:
            raise UnsupportedFormatError(None, "Output format not specified.")

        quality = param.output_quality if param is not None else None
        _ = encode(image, self.stream, requested, quality)


class PilImageSink(ImageSink):
    """Keeps the thumbnail in memory as a Pillow image."""

    def __init__(self):
        super().__init__()
        self._image: Image.Image | None = None

    @property
    @override
    def sink(self) -> Image.Image:
        if self._image is None:
            raise InvalidStateError("PilImageSink does not have a thumbnail to return.")
        return self._image

    @override
    def write(self, image: Image.Image, param: ThumbnailParameter | None = None) -> None:
        if image is None:
            raise ValueError("Cannot write a null image.")
        self._image = image
