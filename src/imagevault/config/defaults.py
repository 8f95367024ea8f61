"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Default cache settings
DEFAULT_CACHE_MAX_COST = 250_000_000  # bytes
DEFAULT_CACHE_MAX_COUNT = 100

# Default storage settings
DEFAULT_STORAGE_DIR = Path.home() / ".imagevault" / "images"

# Default transform settings
DEFAULT_COMPRESSION_QUALITY = 0.8
DEFAULT_CROP_RATIO = None
DEFAULT_MAX_DIMENSION = None

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_max_cost": DEFAULT_CACHE_MAX_COST,
        "cache_max_count": DEFAULT_CACHE_MAX_COUNT,
        "storage_dir": str(DEFAULT_STORAGE_DIR),
        "compression_quality": DEFAULT_COMPRESSION_QUALITY,
        "crop_ratio": DEFAULT_CROP_RATIO,
        "max_dimension": DEFAULT_MAX_DIMENSION,
        "log_level": DEFAULT_LOG_LEVEL,
    }
