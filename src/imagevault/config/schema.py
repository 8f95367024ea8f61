"""Pydantic models for manager configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from imagevault.config.defaults import (
    DEFAULT_CACHE_MAX_COST,
    DEFAULT_CACHE_MAX_COUNT,
    DEFAULT_STORAGE_DIR,
)
from imagevault.transform.config import TransformConfig


class CacheConfig(BaseModel):
    """Memory cache limits. 0 disables a limit."""

    max_cost: int = Field(default=DEFAULT_CACHE_MAX_COST, ge=0)
    max_count: int = Field(default=DEFAULT_CACHE_MAX_COUNT, ge=0)


class StorageConfig(BaseModel):
    base_dir: Path = DEFAULT_STORAGE_DIR


def cache_config_from(config: dict[str, Any]) -> CacheConfig:
    return CacheConfig(
        max_cost=config.get("cache_max_cost", DEFAULT_CACHE_MAX_COST),
        max_count=config.get("cache_max_count", DEFAULT_CACHE_MAX_COUNT),
    )


def storage_config_from(config: dict[str, Any]) -> StorageConfig:
    raw = config.get("storage_dir")
    return StorageConfig(base_dir=Path(raw).expanduser()) if raw else StorageConfig()


def transform_config_from(config: dict[str, Any]) -> TransformConfig:
    """Build a TransformConfig from flat keys, ignoring unset values."""
    fields = {
        name: config[name]
        for name in ("crop_ratio", "compression_quality", "max_dimension")
        if config.get(name) is not None
    }
    return TransformConfig(**fields)
