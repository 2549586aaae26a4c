"""Thumbnail tasks and the sources and sinks they connect."""

from .base import (
    FileThumbnailTask,
    SourceSinkThumbnailTask,
    StreamThumbnailTask,
    TaskState,
    ThumbnailTask,
)
from .sinks import FileImageSink, ImageSink, OutputStreamImageSink, PilImageSink
from .sources import (
    FileImageSource,
    ImageSource,
    InputStreamImageSource,
    PilImageSource,
    URLImageSource,
)

__all__ = [
    "FileImageSink",
    "FileImageSource",
    "FileThumbnailTask",
    "ImageSink",
    "ImageSource",
    "InputStreamImageSource",
    "OutputStreamImageSink",
    "PilImageSink",
    "PilImageSource",
    "SourceSinkThumbnailTask",
    "StreamThumbnailTask",
    "TaskState",
    "ThumbnailTask",
    "URLImageSource",
]
