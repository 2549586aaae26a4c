"""Unit tests for the Pillow-backed codec helpers."""

import io

import pytest
from conftest import make_grid
from PIL import Image

from cl_thumbnailator.codec import (
    decode,
    encode,
    format_from_path,
    is_writable,
    normalize_format_name,
    readable_formats,
    writable_formats,
)
from cl_thumbnailator.common.errors import UnsupportedFormatError


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("JPEG", "JPEG"),
        ("jpg", "JPEG"),
        ("jpeg", "JPEG"),
        (".png", "PNG"),
        ("png", "PNG"),
        ("gif", "GIF"),
        ("bmp", "BMP"),
    ],
)
def test_normalize_format_name(name: str, expected: str):
    """Test extensions and aliases resolve to Pillow format names."""
    assert normalize_format_name(name) == expected


@pytest.mark.parametrize("name", ["foobar", "", None])
def test_normalize_format_name_unknown(name):
    """Test unknown formats raise UnsupportedFormatError."""
    with pytest.raises(UnsupportedFormatError):
        _ = normalize_format_name(name)


def test_format_from_path():
    """Test the format is taken from the last extension."""
    assert format_from_path("a/b/photo.JPG") == "JPEG"
    assert format_from_path("thumb.png.jpg") == "JPEG"
    assert format_from_path("noext") is None
    assert format_from_path("file.foobar") is None


def test_common_formats_are_supported():
    """Test the usual formats can be both read and written."""
    for fmt in ("JPEG", "PNG", "GIF", "BMP"):
        assert fmt in readable_formats()
        assert fmt in writable_formats()
        assert is_writable(fmt)
    assert not is_writable("foobar")
    assert not is_writable(None)


def test_decode_reports_format(png_bytes: bytes):
    """Test decoded images carry their format and are fully loaded."""
    stream = io.BytesIO(png_bytes)
    image = decode(stream)
    assert image.format == "PNG"
    assert image.size == (200, 200)
    assert not stream.closed


def test_decode_draft_reduces_jpeg(jpeg_bytes: bytes):
    """Test a draft size lets JPEG decode at a reduced scale."""
    image = decode(io.BytesIO(jpeg_bytes), draft_size=(50, 50))
    assert image.size == (50, 50)


def test_decode_draft_from_stored_size(jpeg_bytes: bytes):
    """Test a callable draft hint is given the stored size."""
    seen: list[tuple[int, int]] = []

    def hint(size: tuple[int, int]) -> tuple[int, int]:
        seen.append(size)
        return (size[0] // 4, size[1] // 4)

    image = decode(io.BytesIO(jpeg_bytes), draft_size=hint)
    assert seen == [(200, 200)]
    assert image.size == (50, 50)


def test_decode_draft_hint_may_decline(jpeg_bytes: bytes):
    """Test a callable draft hint returning None decodes at full size."""
    image = decode(io.BytesIO(jpeg_bytes), draft_size=lambda size: None)
    assert image.size == (200, 200)


def test_decode_draft_ignored_for_png(png_bytes: bytes):
    """Test formats without draft support decode at full size."""
    image = decode(io.BytesIO(png_bytes), draft_size=(50, 50))
    assert image.size == (200, 200)


def test_decode_unknown_data():
    """Test unrecognized data raises UnsupportedFormatError."""
    with pytest.raises(UnsupportedFormatError):
        _ = decode(io.BytesIO(b"this is not an image"))


def test_decode_truncated_data(png_bytes: bytes):
    """Test truncated data raises OSError."""
    with pytest.raises(OSError):
        _ = decode(io.BytesIO(png_bytes[: len(png_bytes) // 2]))


def test_encode_returns_format():
    """Test encode writes the requested format and reports it."""
    buffer = io.BytesIO()
    assert encode(make_grid(20, 20), buffer, "png") == "PNG"
    _ = buffer.seek(0)
    with Image.open(buffer) as image:
        assert image.format == "PNG"


def test_encode_jpeg_drops_alpha():
    """Test RGBA images are converted for JPEG."""
    buffer = io.BytesIO()
    _ = encode(make_grid(20, 20, mode="RGBA"), buffer, "jpg")
    _ = buffer.seek(0)
    with Image.open(buffer) as image:
        assert image.mode == "RGB"


def test_encode_quality_changes_size():
    """Test lower quality yields smaller JPEG output."""
    image = Image.effect_noise((200, 200), 64).convert("RGB")
    low, high = io.BytesIO(), io.BytesIO()
    _ = encode(image, low, "JPEG", 0.1)
    _ = encode(image, high, "JPEG", 0.95)
    assert len(low.getvalue()) < len(high.getvalue())


def test_encode_unknown_format():
    """Test unknown output formats raise UnsupportedFormatError."""
    with pytest.raises(UnsupportedFormatError):
        _ = encode(make_grid(10, 10), io.BytesIO(), "foobar")
