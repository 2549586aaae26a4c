"""Library settings.

Settings are an explicit value passed to the functions that use them; the
library keeps no global configuration.
"""

import os
from collections.abc import Mapping
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "CL_THUMBNAILATOR_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


class ThumbnailatorSettings(BaseModel):
    """Settings shared by all thumbnail operations."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    conserve_memory_workaround: bool = Field(
        default=False,
        description=(
            "Decode large JPEG sources at a reduced scale when the thumbnail "
            "is much smaller than the source"
        ),
    )
    url_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for reading URL sources",
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build settings from ``CL_THUMBNAILATOR_*`` environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        name = f"{ENV_PREFIX}CONSERVE_MEMORY_WORKAROUND"
        if name in env:
            values["conserve_memory_workaround"] = _parse_bool(name, env[name])

        name = f"{ENV_PREFIX}URL_TIMEOUT"
        if name in env:
            values["url_timeout"] = env[name]

        return cls.model_validate(values)
