"""Unit tests for thumbnail tasks and the create_thumbnail pipeline."""

import io
from pathlib import Path

import numpy as np
import pytest
from conftest import BOTTOM_LEFT_COLOR, TOP_LEFT_COLOR, make_grid, pixels
from PIL import Image

from cl_thumbnailator.builders import Thumbnails
from cl_thumbnailator.codec import DraftSize
from cl_thumbnailator.common import (
    OutputFormat,
    ThumbnailatorSettings,
    ThumbnailParameter,
    ThumbnailParameterBuilder,
)
from cl_thumbnailator.common.errors import UnsupportedFormatError
from cl_thumbnailator.filters import Canvas, ImageFilter
from cl_thumbnailator.geometry import Region
from cl_thumbnailator.tasks import (
    FileImageSink,
    FileImageSource,
    FileThumbnailTask,
    OutputStreamImageSink,
    PilImageSink,
    PilImageSource,
    SourceSinkThumbnailTask,
    StreamThumbnailTask,
    TaskState,
)
from cl_thumbnailator.thumbnailator import create_thumbnail, make_thumbnail_maker


def sized(width: int = 50, height: int = 50, **kwargs) -> ThumbnailParameter:
    builder = ThumbnailParameterBuilder().size(width, height)
    for name, value in kwargs.items():
        _ = getattr(builder, name)(value)
    return builder.build()


class RecordingFileSource(FileImageSource):
    """File source remembering the draft hint and the decoded size."""

    def __init__(self, path: Path):
        super().__init__(path)
        self.draft_size: DraftSize | None = None
        self.decoded_size: tuple[int, int] | None = None

    def read(self, draft_size: DraftSize | None = None) -> Image.Image:
        self.draft_size = draft_size
        image = super().read(draft_size)
        self.decoded_size = image.size
        return image


class Exploding(ImageFilter):
    def apply(self, image: Image.Image) -> Image.Image:
        raise RuntimeError("filter failed")


# ============================================================================
# TASK STATE
# ============================================================================


def test_new_task_is_unstarted():
    """Test tasks start in the UNSTARTED state."""
    task = SourceSinkThumbnailTask(sized(), PilImageSource(make_grid(10, 10)), PilImageSink())
    assert task.state == TaskState.UNSTARTED


def test_successful_task_is_done(grid_image: Image.Image):
    """Test a completed task ends in DONE with the thumbnail in its sink."""
    sink = PilImageSink()
    task = SourceSinkThumbnailTask(sized(), PilImageSource(grid_image), sink)

    create_thumbnail(task)

    assert task.state == TaskState.DONE
    assert sink.sink.size == (50, 25)


def test_failing_filter_marks_task_failed(grid_image: Image.Image):
    """Test an error mid-pipeline sets FAILED and propagates."""
    param = ThumbnailParameterBuilder().size(50, 50).filters([Exploding()]).build()
    task = SourceSinkThumbnailTask(param, PilImageSource(grid_image), PilImageSink())

    with pytest.raises(RuntimeError, match="filter failed"):
        create_thumbnail(task)
    assert task.state == TaskState.FAILED


def test_read_failure_touches_no_destination(tmp_path: Path):
    """Test a missing source fails before anything is written."""
    destination = tmp_path / "out.png"
    task = FileThumbnailTask(sized(), tmp_path / "missing.png", destination)

    with pytest.raises(FileNotFoundError):
        create_thumbnail(task)

    assert task.state == TaskState.FAILED
    assert list(tmp_path.iterdir()) == []


def test_task_rejects_null_parameter(grid_image: Image.Image):
    """Test a task needs a parameter, a source and a sink."""
    with pytest.raises(ValueError, match="The parameter is null."):
        _ = SourceSinkThumbnailTask(None, PilImageSource(grid_image), PilImageSink())  # pyright: ignore[reportArgumentType]
    with pytest.raises(ValueError):
        _ = SourceSinkThumbnailTask(sized(), None, PilImageSink())  # pyright: ignore[reportArgumentType]
    with pytest.raises(ValueError):
        _ = SourceSinkThumbnailTask(sized(), PilImageSource(grid_image), None)  # pyright: ignore[reportArgumentType]


def test_create_thumbnail_rejects_none():
    """Test create_thumbnail needs a task."""
    with pytest.raises(ValueError):
        create_thumbnail(None)  # pyright: ignore[reportArgumentType]


# ============================================================================
# OUTPUT FORMAT POLICY
# ============================================================================


def test_original_format_uses_input_format(image_file, tmp_path: Path):
    """Test ORIGINAL writes in the source format, appending it on mismatch."""
    source = image_file("grid.png")
    task = SourceSinkThumbnailTask(sized(), FileImageSource(source), FileImageSink(tmp_path / "out.jpg"))

    create_thumbnail(task)

    assert task.destination.sink == tmp_path / "out.jpg.PNG"
    with Image.open(task.destination.sink) as image:
        assert image.format == "PNG"


def test_determine_format_uses_sink_preference(image_file, tmp_path: Path):
    """Test DETERMINE lets the file extension decide."""
    param = sized(output_format=OutputFormat.DETERMINE)
    task = SourceSinkThumbnailTask(
        param, FileImageSource(image_file("grid.png")), FileImageSink(tmp_path / "out.jpg")
    )

    create_thumbnail(task)

    assert task.destination.sink == tmp_path / "out.jpg"
    with Image.open(tmp_path / "out.jpg") as image:
        assert image.format == "JPEG"


def test_determine_falls_back_to_original_for_streams(png_bytes: bytes):
    """Test a sink without preference gets the input format."""
    output = io.BytesIO()
    param = sized(output_format=OutputFormat.DETERMINE)
    task = StreamThumbnailTask(param, io.BytesIO(png_bytes), output)

    create_thumbnail(task)

    _ = output.seek(0)
    with Image.open(output) as image:
        assert image.format == "PNG"


def test_explicit_format_wins(png_bytes: bytes):
    """Test an explicit format overrides both source and sink."""
    output = io.BytesIO()
    task = StreamThumbnailTask(sized(output_format="bmp"), io.BytesIO(png_bytes), output)

    create_thumbnail(task)

    _ = output.seek(0)
    with Image.open(output) as image:
        assert image.format == "BMP"


def test_in_memory_source_to_stream_needs_format(grid_image: Image.Image):
    """Test an image without format cannot go to a stream without an explicit format."""
    task = SourceSinkThumbnailTask(sized(), PilImageSource(grid_image), OutputStreamImageSink(io.BytesIO()))

    with pytest.raises(UnsupportedFormatError):
        create_thumbnail(task)
    assert task.state == TaskState.FAILED


def test_file_task_format_from_destination_extension(image_file, tmp_path: Path):
    """Test a file task writes in the format named by the destination."""
    task = FileThumbnailTask(sized(), image_file("grid.png"), tmp_path / "out.jpg")

    create_thumbnail(task)

    assert task.destination.sink == tmp_path / "out.jpg"
    with Image.open(tmp_path / "out.jpg") as image:
        assert image.format == "JPEG"


def test_file_task_without_extension_uses_input_format(image_file, tmp_path: Path):
    """Test a destination without extension gets the input format appended."""
    task = FileThumbnailTask(sized(), image_file("grid.png"), tmp_path / "out")

    create_thumbnail(task)

    assert task.destination.sink == tmp_path / "out.PNG"


def test_file_task_unknown_extension(image_file, tmp_path: Path):
    """Test an unsupported destination extension fails the task."""
    task = FileThumbnailTask(sized(), image_file("grid.png"), tmp_path / "out.foobar")

    with pytest.raises(UnsupportedFormatError):
        create_thumbnail(task)
    assert not (tmp_path / "out.foobar").exists()


def test_stream_task_leaves_streams_open(jpeg_bytes: bytes):
    """Test neither stream is closed by the task."""
    source, output = io.BytesIO(jpeg_bytes), io.BytesIO()
    create_thumbnail(StreamThumbnailTask(sized(), source, output))
    assert not source.closed
    assert not output.closed
    assert output.getvalue()


# ============================================================================
# PIPELINE STAGES
# ============================================================================


def test_exif_orientation_applied(oriented_jpeg):
    """Test a sideways JPEG is made upright before sizing."""
    sink = PilImageSink()
    task = SourceSinkThumbnailTask(sized(), FileImageSource(oriented_jpeg(6)), sink)

    create_thumbnail(task)

    thumbnail = sink.sink
    assert thumbnail.size == (25, 50)
    assert np.abs(np.array(thumbnail.getpixel((3, 3))) - BOTTOM_LEFT_COLOR).max() < 40


def test_exif_orientation_ignored_when_disabled(oriented_jpeg):
    """Test orientation is left alone when disabled."""
    sink = PilImageSink()
    param = sized(use_orientation=False)
    create_thumbnail(SourceSinkThumbnailTask(param, FileImageSource(oriented_jpeg(6)), sink))
    assert sink.sink.size == (50, 25)


def test_source_region_cropped(image_file):
    """Test only the region is used for the thumbnail."""
    sink = PilImageSink()
    param = sized(region=Region.of(0, 0, 100, 50))
    create_thumbnail(SourceSinkThumbnailTask(param, FileImageSource(image_file()), sink))

    assert sink.sink.size == (50, 25)
    assert np.all(pixels(sink.sink) == TOP_LEFT_COLOR)


def test_region_applies_after_orientation(oriented_jpeg):
    """Test region coordinates refer to the upright image."""
    sink = PilImageSink()
    param = sized(100, 100, region=Region.of(0, 0, 100, 200))
    create_thumbnail(SourceSinkThumbnailTask(param, FileImageSource(oriented_jpeg(6)), sink))

    # The upright image is 100x200, so the whole region overlaps it
    assert sink.sink.size == (50, 100)


def test_filters_run_after_resize(grid_image: Image.Image):
    """Test filters see the resized thumbnail."""
    sink = PilImageSink()
    param = ThumbnailParameterBuilder().size(50, 50).filters([Canvas(60, 60)]).build()
    create_thumbnail(SourceSinkThumbnailTask(param, PilImageSource(grid_image), sink))
    assert sink.sink.size == (60, 60)


def test_palette_source_normalized(tmp_path: Path):
    """Test palette images are converted before resampling."""
    path = tmp_path / "palette.gif"
    make_grid(100, 100).convert("P").save(path)
    sink = PilImageSink()

    create_thumbnail(SourceSinkThumbnailTask(sized(), FileImageSource(path), sink))

    assert sink.sink.mode == "RGB"
    assert sink.sink.size == (50, 50)


def test_scale_parameter_maker():
    """Test scale parameters produce a scaling maker."""
    param = ThumbnailParameterBuilder().scale(0.5).build()
    assert make_thumbnail_maker(param).calculate_size(200, 100) == (100, 50)


# ============================================================================
# CONSERVE MEMORY WORKAROUND
# ============================================================================


@pytest.fixture
def large_jpeg(tmp_path: Path) -> Path:
    path = tmp_path / "large.jpg"
    make_grid(1600, 1600).save(path, "JPEG")
    return path


def test_conserve_memory_decodes_reduced(large_jpeg: Path):
    """Test large JPEGs are decoded at a reduced scale when enabled."""
    source = RecordingFileSource(large_jpeg)
    sink = PilImageSink()
    settings = ThumbnailatorSettings(conserve_memory_workaround=True)

    create_thumbnail(SourceSinkThumbnailTask(sized(100, 100), source, sink), settings)

    assert callable(source.draft_size)
    assert source.decoded_size == (200, 200)
    assert sink.sink.size == (100, 100)


def test_conserve_memory_off_by_default(large_jpeg: Path):
    """Test sources are decoded at full size by default."""
    source = RecordingFileSource(large_jpeg)
    create_thumbnail(SourceSinkThumbnailTask(sized(100, 100), source, PilImageSink()))
    assert source.draft_size is None
    assert source.decoded_size == (1600, 1600)


def test_conserve_memory_skipped_with_region(large_jpeg: Path):
    """Test a source region needs full resolution pixels."""
    source = RecordingFileSource(large_jpeg)
    param = sized(100, 100, region=Region.of(0, 0, 400, 400))
    settings = ThumbnailatorSettings(conserve_memory_workaround=True)

    create_thumbnail(SourceSinkThumbnailTask(param, source, PilImageSink()), settings)

    assert source.draft_size is None


def test_conserve_memory_by_scale(large_jpeg: Path):
    """Test scale parameters also decode reduced, sized from the full source."""
    source = RecordingFileSource(large_jpeg)
    sink = PilImageSink()
    param = ThumbnailParameterBuilder().scale(0.1).build()
    settings = ThumbnailatorSettings(conserve_memory_workaround=True)

    create_thumbnail(SourceSinkThumbnailTask(param, source, sink), settings)

    assert source.decoded_size is not None
    assert 160 <= min(source.decoded_size)
    assert max(source.decoded_size) < 1600
    assert sink.sink.size == (160, 160)


@pytest.mark.parametrize("side", ["width", "height"])
def test_conserve_memory_width_or_height_only(side: str, large_jpeg: Path):
    """Test a lone width or height bounds the decode by that side."""
    source = RecordingFileSource(large_jpeg)
    builder = Thumbnails.from_image_sources([source]).settings(
        ThumbnailatorSettings(conserve_memory_workaround=True)
    )

    thumbnail = getattr(builder, side)(150).as_image()

    assert source.decoded_size is not None
    assert 150 <= min(source.decoded_size)
    assert max(source.decoded_size) < 1600
    assert thumbnail.size == (150, 150)


def test_conserve_memory_sizes_sideways_source(oriented_jpeg):
    """Test the full size used for sizing is turned with the orientation."""
    source = RecordingFileSource(oriented_jpeg(6))
    sink = PilImageSink()
    settings = ThumbnailatorSettings(conserve_memory_workaround=True)

    create_thumbnail(SourceSinkThumbnailTask(sized(20, 20), source, sink), settings)

    assert source.decoded_size == (100, 50)
    assert sink.sink.size == (10, 20)


# ============================================================================
# END TO END SIZING
# ============================================================================


@pytest.mark.slow
def test_tall_source_fits_box_through_tiles(resize_calls):
    """Test a 5000x15000 source fits a 300x300 box, resampled tile by tile."""
    sink = PilImageSink()
    source = PilImageSource(Image.new("L", (5000, 15000), 128))

    create_thumbnail(SourceSinkThumbnailTask(sized(300, 300), source, sink))

    assert sink.sink.size == (100, 300)
    assert len(resize_calls) > 1
    for _size, _resample, box in resize_calls:
        assert box is not None
        left, top, right, bottom = box
        assert right - left <= 512
        assert bottom - top <= 512


@pytest.mark.parametrize(
    "builder",
    [
        ThumbnailParameterBuilder().scale(0.5),
        ThumbnailParameterBuilder().size(100, 100),
    ],
)
def test_half_size_by_scale_or_box(builder: ThumbnailParameterBuilder):
    """Test a 200x200 source gives 100x100 by scale and by aspect-locked size."""
    sink = PilImageSink()
    source = PilImageSource(make_grid(200, 200))

    create_thumbnail(SourceSinkThumbnailTask(builder.build(), source, sink))

    assert sink.sink.size == (100, 100)
