"""Consecutively numbered destination filenames."""

from collections.abc import Iterator
from pathlib import Path


class ConsecutivelyNumberedFilenames:
    """Endless sequence of numbered paths.

    ``name_format`` is a printf style pattern receiving the number, e.g.
    ``"thumbnail-%04d.jpg"``. Paths are relative unless ``directory`` is
    given, which must be an existing directory.

    >>> names = iter(ConsecutivelyNumberedFilenames(name_format="hello-%d.jpg", start=5))
    >>> next(names)
    PosixPath('hello-5.jpg')
    """

    def __init__(
        self,
        directory: str | Path | None = None,
        name_format: str = "%d",
        start: int = 0,
    ):
        if directory is not None:
            directory = Path(directory)
            if not directory.is_dir():
                raise NotADirectoryError("Specified path is not a directory or does not exist.")
        self.directory: Path | None = directory
        self.name_format: str = name_format
        self.start: int = start

    def __iter__(self) -> Iterator[Path]:
        number = self.start
        while True:
            name = self.name_format % number
            yield self.directory / name if self.directory is not None else Path(name)
            number += 1
