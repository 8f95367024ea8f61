"""Storage subsystem: bounded memory cache in front of a disk store."""

from imagevault.cache.disk import DiskStore
from imagevault.cache.keys import ImageFormat, generate_key, validate_key
from imagevault.cache.manager import ImageManager
from imagevault.cache.memory import BoundedCache
from imagevault.cache.stats import CacheEntry, CacheStats

__all__ = [
    "BoundedCache",
    "CacheEntry",
    "CacheStats",
    "DiskStore",
    "ImageFormat",
    "ImageManager",
    "generate_key",
    "validate_key",
]
