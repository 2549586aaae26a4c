from .config import ThumbnailatorSettings
from .errors import (
    DestinationExistsError,
    InsufficientDestinationsError,
    InvalidStateError,
    ThumbnailatorError,
    UnsupportedFormatError,
)
from .schemas import OutputFormat, ThumbnailParameter, ThumbnailParameterBuilder

__all__ = [
    "DestinationExistsError",
    "InsufficientDestinationsError",
    "InvalidStateError",
    "OutputFormat",
    "ThumbnailParameter",
    "ThumbnailParameterBuilder",
    "ThumbnailatorError",
    "ThumbnailatorSettings",
    "UnsupportedFormatError",
]
