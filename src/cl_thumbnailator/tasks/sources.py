"""Image sources: where a thumbnail task reads its image from."""

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, override
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx
from loguru import logger
from PIL import Image

from ..codec import DraftSize, decode
from ..common.errors import InvalidStateError
from ..orientation import read_orientation

DEFAULT_URL_TIMEOUT = 30.0


class ImageSource(ABC):
    """Reads one image and remembers its format and EXIF orientation.

    ``input_format_name`` and ``orientation`` are only available after
    ``read`` has been called.
    """

    def __init__(self):
        self._has_read: bool = False
        self._input_format_name: str | None = None
        self._orientation: int | None = None

    @abstractmethod
    def read(self, draft_size: DraftSize | None = None) -> Image.Image:
        """Decode the image.

        ``draft_size`` is a hint that the caller needs no more than that many
        pixels, or a function computing that from the stored size; sources
        may use it to decode at a reduced scale.
        """

    @property
    @abstractmethod
    def source(self) -> object: ...

    @property
    def has_read(self) -> bool:
        return self._has_read

    @property
    def input_format_name(self) -> str | None:
        """Pillow format name of the image that was read, if it had one."""
        if not self._has_read:
            raise InvalidStateError("Input has not been read yet.")
        return self._input_format_name

    @property
    def orientation(self) -> int | None:
        """EXIF orientation code 1..8 of the image that was read, if any."""
        if not self._has_read:
            raise InvalidStateError("Input has not been read yet.")
        return self._orientation

    def _finish_read(self, image: Image.Image) -> Image.Image:
        self._input_format_name = image.format
        self._orientation = read_orientation(image)
        self._has_read = True
        logger.debug(
            f"Read {image.size} {image.mode} image from {self.source!r}: "
            f"format={self._input_format_name}, orientation={self._orientation}"
        )
        return image


class FileImageSource(ImageSource):
    def __init__(self, path: str | Path):
        super().__init__()
        if path is None:
            raise ValueError("File is null.")
        self.path: Path = Path(path)

    @property
    @override
    def source(self) -> Path:
        return self.path

    @override
    def read(self, draft_size: DraftSize | None = None) -> Image.Image:
        with open(self.path, "rb") as fp:
            image = decode(fp, draft_size)
        return self._finish_read(image)


class InputStreamImageSource(ImageSource):
    """Reads from a binary stream, which is left open."""

    def __init__(self, stream: IO[bytes]):
        super().__init__()
        if stream is None:
            raise ValueError("InputStream cannot be null.")
        self.stream: IO[bytes] = stream

    @property
    @override
    def source(self) -> IO[bytes]:
        return self.stream

    @override
    def read(self, draft_size: DraftSize | None = None) -> Image.Image:
        return self._finish_read(decode(self.stream, draft_size))


class URLImageSource(ImageSource):
    """Downloads the image with httpx.

    ``file:`` URLs are read from the local filesystem. HTTP failures surface
    as ``httpx.HTTPError``.
    """

    def __init__(
        self,
        url: str,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_URL_TIMEOUT,
    ):
        super().__init__()
        if not url:
            raise ValueError("URL cannot be null.")
        self.url: str = str(url)
        self.client: httpx.Client | None = client
        self.timeout: float = timeout

    @property
    @override
    def source(self) -> str:
        return self.url

    @override
    def read(self, draft_size: DraftSize | None = None) -> Image.Image:
        parsed = urlparse(self.url)
        if parsed.scheme == "file":
            with open(url2pathname(parsed.path), "rb") as fp:
                return self._finish_read(decode(fp, draft_size))

        try:
            data = self._download()
        except httpx.HTTPError as e:
            logger.error(f"Failed to read image from {self.url}: {e}")
            raise
        return self._finish_read(decode(io.BytesIO(data), draft_size))

    def _download(self) -> bytes:
        if self.client is not None:
            response = self.client.get(self.url, follow_redirects=True, timeout=self.timeout)
            _ = response.raise_for_status()
            return response.content

        with httpx.stream("GET", self.url, follow_redirects=True, timeout=self.timeout) as response:
            _ = response.raise_for_status()
            return response.read()


class PilImageSource(ImageSource):
    """Wraps an in-memory image. It has no format and no orientation."""

    def __init__(self, image: Image.Image):
        super().__init__()
        if image is None:
            raise ValueError("Image cannot be null.")
        self.image: Image.Image = image

    @property
    @override
    def source(self) -> Image.Image:
        return self.image

    @override
    def read(self, draft_size: DraftSize | None = None) -> Image.Image:
        self._input_format_name = None
        self._orientation = None
        self._has_read = True
        return self.image
