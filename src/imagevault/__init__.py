"""imagevault: bounded image cache over durable disk storage, plus transforms."""

from imagevault.cache.keys import ImageFormat
from imagevault.cache.manager import ImageManager
from imagevault.transform.config import TransformConfig
from imagevault.transform.transformer import ImageTransformer

__all__ = ["ImageFormat", "ImageManager", "ImageTransformer", "TransformConfig"]
