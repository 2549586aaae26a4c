from .image import blank, has_alpha, normalize_mode
from .profiling import timed

__all__ = ["blank", "has_alpha", "normalize_mode", "timed"]
