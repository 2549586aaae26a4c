"""cl_thumbnailator - thumbnail generation for Pillow.

Resizes images from files, streams, URLs or memory, choosing a resampling
strategy suited to the scale change, and writes the result to files,
streams or memory.
"""

from .builders import Builder, Thumbnails
from .common import (
    DestinationExistsError,
    InsufficientDestinationsError,
    InvalidStateError,
    OutputFormat,
    ThumbnailatorError,
    ThumbnailatorSettings,
    ThumbnailParameter,
    ThumbnailParameterBuilder,
    UnsupportedFormatError,
)
from .filters import Canvas, Caption, Flip, ImageFilter, Pipeline, Rotation, Transparency, Watermark
from .geometry import AbsoluteSize, Coordinate, Dimension, Positions, Region, RelativeSize
from .makers import FixedSizeThumbnailMaker, ScaledThumbnailMaker
from .name import ConsecutivelyNumberedFilenames, Rename
from .orientation import inverse_orientation_filter, orientation_filter, read_orientation
from .resizers import DefaultResizerFactory, FixedResizerFactory, Resizers
from .tasks import TaskState
from .thumbnailator import (
    create_thumbnail,
    create_thumbnail_file,
    create_thumbnail_from_file,
    create_thumbnail_from_image,
    create_thumbnail_stream,
    create_thumbnails,
    create_thumbnails_as_collection,
)

__version__ = "0.1.0"

__all__ = [
    "AbsoluteSize",
    "Builder",
    "Canvas",
    "Caption",
    "ConsecutivelyNumberedFilenames",
    "Coordinate",
    "DefaultResizerFactory",
    "DestinationExistsError",
    "Dimension",
    "FixedResizerFactory",
    "FixedSizeThumbnailMaker",
    "Flip",
    "ImageFilter",
    "InsufficientDestinationsError",
    "InvalidStateError",
    "OutputFormat",
    "Pipeline",
    "Positions",
    "Region",
    "RelativeSize",
    "Rename",
    "Resizers",
    "Rotation",
    "ScaledThumbnailMaker",
    "TaskState",
    "ThumbnailParameter",
    "ThumbnailParameterBuilder",
    "ThumbnailatorError",
    "ThumbnailatorSettings",
    "Thumbnails",
    "Transparency",
    "UnsupportedFormatError",
    "Watermark",
    "__version__",
    "create_thumbnail",
    "create_thumbnail_file",
    "create_thumbnail_from_file",
    "create_thumbnail_from_image",
    "create_thumbnail_stream",
    "create_thumbnails",
    "create_thumbnails_as_collection",
    "inverse_orientation_filter",
    "orientation_filter",
    "read_orientation",
]
