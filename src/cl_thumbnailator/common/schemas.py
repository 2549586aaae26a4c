"""Pydantic models describing how a thumbnail is produced."""

from collections.abc import Iterable
from enum import StrEnum
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..filters import ImageFilter
from ..geometry import Dimension, Region
from ..resizers import DefaultResizerFactory, FixedResizerFactory, Resizer, ResizerFactory
from .errors import InvalidStateError


class OutputFormat(StrEnum):
    """Output format policies.

    Any other string given as an output format names the format explicitly.
    """

    ORIGINAL = "original"
    """Reuse the format the source image was read in."""

    DETERMINE = "determine"
    """Let the destination decide, e.g. from a file extension."""


# ─────────────────────────────────────────────────────────────
# Thumbnail parameter
# ─────────────────────────────────────────────────────────────


class ThumbnailParameter(BaseModel):
    """Immutable description of one thumbnail operation.

    Exactly one of ``size`` or the ``width_scale``/``height_scale`` pair is
    set. ``keep_aspect_ratio`` and ``fit_within_dimensions`` only matter for
    size based parameters.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, arbitrary_types_allowed=True, extra="forbid"
    )

    size: Dimension | None = Field(default=None, description="Target box (width, height)")
    width_scale: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    height_scale: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    keep_aspect_ratio: bool = True
    fit_within_dimensions: bool = True
    source_region: Region | None = Field(
        default=None, description="Part of the source to make the thumbnail from"
    )
    output_format: str = Field(default=OutputFormat.ORIGINAL, min_length=1)
    output_quality: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Codec quality, 0.0 to 1.0"
    )
    image_mode: str | None = Field(default=None, description="Pillow mode of the thumbnail")
    filters: tuple[ImageFilter, ...] = ()
    resizer_factory: ResizerFactory = Field(default_factory=DefaultResizerFactory)
    use_orientation: bool = True

    @model_validator(mode="before")
    @classmethod
    def default_height_scale(cls, data: object) -> object:
        """A single scale factor applies to both sides."""
        if isinstance(data, dict) and data.get("height_scale") is None:
            if data.get("width_scale") is not None:
                return {**data, "height_scale": data["width_scale"]}
        return data

    @field_validator("size")
    @classmethod
    def validate_size(cls, v: Dimension | None) -> Dimension | None:
        if v is not None and (v.width <= 0 or v.height <= 0):
            raise ValueError(f"Width and height must be greater than 0, got {v.width}x{v.height}")
        return v

    @model_validator(mode="after")
    def validate_size_or_scale(self) -> Self:
        has_scale = self.width_scale is not None
        if (self.size is None) == (not has_scale):
            raise ValueError("Exactly one of size or scale must be given")
        return self

    @property
    def uses_scale(self) -> bool:
        return self.width_scale is not None

    @property
    def is_original_format(self) -> bool:
        return self.output_format == OutputFormat.ORIGINAL

    @property
    def is_determined_format(self) -> bool:
        return self.output_format == OutputFormat.DETERMINE


# ─────────────────────────────────────────────────────────────
# Parameter builder
# ─────────────────────────────────────────────────────────────


class ThumbnailParameterBuilder:
    """Fluent construction of a ``ThumbnailParameter``.

    Setting a size clears a previously set scale and vice versa. Sizes and
    scale factors are checked when set; everything else is validated in
    ``build``.
    """

    def __init__(self):
        self._size: Dimension | None = None
        self._width_scale: float | None = None
        self._height_scale: float | None = None
        self._keep_aspect_ratio: bool = True
        self._fit_within_dimensions: bool = True
        self._region: Region | None = None
        self._output_format: str = OutputFormat.ORIGINAL
        self._output_quality: float | None = None
        self._image_mode: str | None = None
        self._filters: list[ImageFilter] = []
        self._resizer_factory: ResizerFactory = DefaultResizerFactory()
        self._use_orientation: bool = True

    def size(self, width: int, height: int) -> Self:
        if width <= 0 or height <= 0:
            raise ValueError(f"Width and height must be greater than 0, got {width}x{height}")
        self._size = Dimension(width, height)
        self._width_scale = self._height_scale = None
        return self

    def scale(self, factor: float, height_factor: float | None = None) -> Self:
        height_factor = factor if height_factor is None else height_factor
        if not (factor > 0 and height_factor > 0):
            raise ValueError(f"Scale factors must be greater than 0, got {factor}, {height_factor}")
        self._width_scale = factor
        self._height_scale = height_factor
        self._size = None
        return self

    def keep_aspect_ratio(self, keep: bool) -> Self:
        self._keep_aspect_ratio = keep
        return self

    def fit_within_dimensions(self, fit: bool) -> Self:
        self._fit_within_dimensions = fit
        return self

    def region(self, region: Region | None) -> Self:
        self._region = region
        return self

    def output_format(self, format_name: str) -> Self:
        self._output_format = format_name
        return self

    def output_quality(self, quality: float | None) -> Self:
        self._output_quality = quality
        return self

    def image_mode(self, mode: str | None) -> Self:
        self._image_mode = mode
        return self

    def filters(self, filters: Iterable[ImageFilter]) -> Self:
        self._filters = list(filters)
        return self

    def resizer(self, resizer: Resizer) -> Self:
        self._resizer_factory = FixedResizerFactory(resizer)
        return self

    def resizer_factory(self, factory: ResizerFactory) -> Self:
        self._resizer_factory = factory
        return self

    def use_orientation(self, use: bool) -> Self:
        self._use_orientation = use
        return self

    def build(self) -> ThumbnailParameter:
        if self._size is None and self._width_scale is None:
            raise InvalidStateError("Neither size nor scale has been set.")

        return ThumbnailParameter(
            size=self._size,
            width_scale=self._width_scale,
            height_scale=self._height_scale,
            keep_aspect_ratio=self._keep_aspect_ratio,
            fit_within_dimensions=self._fit_within_dimensions,
            source_region=self._region,
            output_format=self._output_format,
            output_quality=self._output_quality,
            image_mode=self._image_mode,
            filters=tuple(self._filters),
            resizer_factory=self._resizer_factory,
            use_orientation=self._use_orientation,
        )
