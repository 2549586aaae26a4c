"""Unit tests for rename policies and numbered filenames."""

from itertools import islice
from pathlib import Path

import pytest

from cl_thumbnailator.name import (
    ConsecutivelyNumberedFilenames,
    Rename,
    append_suffix,
    with_prefix,
    with_suffix,
)

# ============================================================================
# RENAME
# ============================================================================


@pytest.mark.parametrize(
    ("rename", "expected"),
    [
        (Rename.NO_CHANGE, "photo.jpg"),
        (Rename.PREFIX_DOT_THUMBNAIL, "thumbnail.photo.jpg"),
        (Rename.PREFIX_HYPHEN_THUMBNAIL, "thumbnail-photo.jpg"),
        (Rename.SUFFIX_DOT_THUMBNAIL, "photo.thumbnail.jpg"),
        (Rename.SUFFIX_HYPHEN_THUMBNAIL, "photo-thumbnail.jpg"),
    ],
)
def test_stock_policies(rename, expected: str):
    """Test each stock policy on a name with an extension."""
    assert rename(0, "photo.jpg", None) == expected


def test_suffix_without_extension():
    """Test suffixes are appended when the name has no extension."""
    assert Rename.SUFFIX_HYPHEN_THUMBNAIL(0, "photo", None) == "photo-thumbnail"


def test_suffix_goes_before_last_extension():
    """Test only the last extension is kept after the suffix."""
    assert append_suffix("archive.tar.gz", "-small") == "archive.tar-small.gz"


def test_custom_policies():
    """Test prefix and suffix factories."""
    assert with_prefix("small_")(3, "a.png", None) == "small_a.png"
    assert with_suffix("@2x")(3, "a.png", None) == "a@2x.png"


# ============================================================================
# NUMBERED FILENAMES
# ============================================================================


def test_numbered_default():
    """Test plain numbers starting at zero."""
    names = list(islice(ConsecutivelyNumberedFilenames(), 3))
    assert names == [Path("0"), Path("1"), Path("2")]


def test_numbered_format_and_start(tmp_path: Path):
    """Test a printf pattern inside a directory."""
    names = ConsecutivelyNumberedFilenames(tmp_path, "thumb-%03d.jpg", start=7)
    assert list(islice(names, 2)) == [tmp_path / "thumb-007.jpg", tmp_path / "thumb-008.jpg"]


def test_numbered_restarts_per_iteration():
    """Test each iteration starts from the beginning."""
    names = ConsecutivelyNumberedFilenames(name_format="%d.png", start=1)
    assert next(iter(names)) == Path("1.png")
    assert next(iter(names)) == Path("1.png")


def test_numbered_requires_directory(tmp_path: Path):
    """Test a missing or non-directory path is rejected."""
    with pytest.raises(NotADirectoryError):
        _ = ConsecutivelyNumberedFilenames(tmp_path / "missing")

    file = tmp_path / "file.txt"
    _ = file.write_text("x")
    with pytest.raises(NotADirectoryError, match="Specified path is not a directory"):
        _ = ConsecutivelyNumberedFilenames(file)
