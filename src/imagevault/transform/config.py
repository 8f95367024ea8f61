"""Transform configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_COMPRESSION_QUALITY = 0.8


class TransformConfig(BaseModel):
    """Immutable crop / resize / compress settings.

    crop_ratio is width / height (1.0 square, 16/9 widescreen).
    max_dimension caps the longer side in pixels; images are never upscaled.
    """

    crop_ratio: float | None = Field(default=None, gt=0)
    compression_quality: float = Field(default=DEFAULT_COMPRESSION_QUALITY, ge=0.0, le=1.0)
    max_dimension: float | None = Field(default=None, gt=0)
    model_config = {"frozen": True}
