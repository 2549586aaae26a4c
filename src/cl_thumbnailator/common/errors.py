"""Exception hierarchy for thumbnail processing."""

from pathlib import Path


class ThumbnailatorError(Exception):
    """Base class for thumbnailator errors."""


class InvalidStateError(ThumbnailatorError, RuntimeError):
    """An object was used before it was initialized, or initialized twice."""


class UnsupportedFormatError(ThumbnailatorError):
    """A codec was requested for a format Pillow cannot read or write."""

    def __init__(self, format_name: str | None, message: str | None = None):
        self.format_name: str | None = format_name
        if message is None:
            message = f"No suitable codec found for format: {format_name!r}"
        super().__init__(message)


class DestinationExistsError(ThumbnailatorError, FileExistsError):
    def __init__(self, path: str | Path):
        self.path: Path = Path(path)
        super().__init__("The destination file exists.")


class InsufficientDestinationsError(ThumbnailatorError, IndexError):
    def __init__(self, written: int):
        self.written: int = written
        super().__init__(
            f"Not enough destinations were given; ran out after writing {written} image(s)"
        )
