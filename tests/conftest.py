"""Test configuration and fixtures for cl_thumbnailator.

All test images are synthesized with Pillow:
- Grid images with distinct quadrant colors (orientation, crop, placement)
- EXIF-oriented JPEGs
- Images written to disk in a chosen format
"""

import io
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from cl_thumbnailator.orientation import ORIENTATION_TAG

# Quadrant colors of the grid image, clockwise from top-left
TOP_LEFT_COLOR = (255, 0, 0)
TOP_RIGHT_COLOR = (0, 255, 0)
BOTTOM_RIGHT_COLOR = (0, 0, 255)
BOTTOM_LEFT_COLOR = (255, 255, 0)


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: resizes large images",
    )


# ============================================================================
# Image helpers
# ============================================================================


def make_grid(width: int, height: int, mode: str = "RGB") -> Image.Image:
    """Image split into four solid quadrants (see the *_COLOR constants)."""
    image = Image.new("RGB", (width, height))
    half_w, half_h = width // 2, height // 2
    image.paste(TOP_LEFT_COLOR, (0, 0, half_w, half_h))
    image.paste(TOP_RIGHT_COLOR, (half_w, 0, width, half_h))
    image.paste(BOTTOM_RIGHT_COLOR, (half_w, half_h, width, height))
    image.paste(BOTTOM_LEFT_COLOR, (0, half_h, half_w, height))
    return image if mode == "RGB" else image.convert(mode)


def pixels(image: Image.Image) -> np.ndarray:
    """Pixel data as a numpy array, for exact comparisons."""
    return np.asarray(image)


def mean_abs_diff(a: Image.Image, b: Image.Image) -> float:
    """Mean absolute per-channel difference of two same-sized images."""
    assert a.size == b.size
    return float(np.mean(np.abs(pixels(a).astype(np.int16) - pixels(b).astype(np.int16))))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def grid_image() -> Image.Image:
    """200x100 RGB grid image."""
    return make_grid(200, 100)


@pytest.fixture
def image_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a grid image to ``tmp_path`` and returning its path."""

    def _write(
        name: str = "grid.png",
        size: tuple[int, int] = (200, 100),
        format: str | None = None,
        mode: str = "RGB",
    ) -> Path:
        path = tmp_path / name
        make_grid(*size, mode=mode).save(path, format=format)
        return path

    return _write


@pytest.fixture
def oriented_jpeg(tmp_path: Path) -> Callable[[int], Path]:
    """Factory writing a 200x100 grid JPEG tagged with an EXIF orientation."""

    def _write(orientation: int) -> Path:
        path = tmp_path / f"orientation-{orientation}.jpg"
        exif = Image.Exif()
        exif[ORIENTATION_TAG] = orientation
        make_grid(200, 100).save(path, "JPEG", exif=exif, quality=95)
        return path

    return _write


@pytest.fixture
def jpeg_bytes() -> bytes:
    """200x200 grid encoded as JPEG."""
    buffer = io.BytesIO()
    make_grid(200, 200).save(buffer, "JPEG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """200x200 grid encoded as PNG."""
    buffer = io.BytesIO()
    make_grid(200, 200).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def resize_calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[tuple[int, int], object, object]]:
    """Record ``(size, resample, box)`` of every ``Image.resize`` call."""
    calls: list[tuple[tuple[int, int], object, object]] = []
    real_resize = Image.Image.resize

    def spy(self, size, resample=None, box=None, reducing_gap=None):
        calls.append((tuple(size), resample, box))
        return real_resize(self, size, resample, box, reducing_gap)

    monkeypatch.setattr(Image.Image, "resize", spy)
    return calls
