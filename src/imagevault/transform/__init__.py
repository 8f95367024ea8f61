"""Deterministic crop / resize / re-encode pipeline."""

from imagevault.transform.config import TransformConfig
from imagevault.transform.transformer import ImageTransformer

__all__ = ["ImageTransformer", "TransformConfig"]
