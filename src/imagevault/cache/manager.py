"""Image manager: orchestrates the L1 memory cache and the L2 disk store."""

from __future__ import annotations

import logging
from typing import Any

from imagevault.cache.disk import DiskStore
from imagevault.cache.keys import ImageFormat, generate_key
from imagevault.cache.memory import BoundedCache
from imagevault.cache.stats import CacheStats
from imagevault.codec.base import DecodedImage, ImageCodec
from imagevault.config.schema import (
    CacheConfig,
    StorageConfig,
    cache_config_from,
    storage_config_from,
)
from imagevault.errors.exceptions import UnsupportedCapabilityError

logger = logging.getLogger(__name__)


class ImageManager:
    """Two-tier image store: L1 bounded memory cache → L2 disk.

    Disk is the source of truth. The cache is consulted first on loads and
    filled on saves and on disk hits. Cache and disk are separate critical
    sections; no cache lock is held during disk I/O.
    """

    def __init__(
        self,
        cache_config: CacheConfig | None = None,
        storage_config: StorageConfig | None = None,
        codec: ImageCodec | None = None,
    ) -> None:
        cache_config = cache_config or CacheConfig()
        storage_config = storage_config or StorageConfig()
        self._cache = BoundedCache(
            max_cost=cache_config.max_cost,
            max_count=cache_config.max_count,
        )
        self._storage = DiskStore(base_dir=storage_config.base_dir)
        self._codec = codec

    @classmethod
    def from_config(
        cls, config: dict[str, Any], codec: ImageCodec | None = None
    ) -> ImageManager:
        """Build from a flat dict as returned by load_config_hierarchy()."""
        return cls(
            cache_config=cache_config_from(config),
            storage_config=storage_config_from(config),
            codec=codec,
        )

    @property
    def cache(self) -> BoundedCache:
        return self._cache

    @property
    def storage(self) -> DiskStore:
        return self._storage

    def save(
        self,
        data: bytes,
        key: str | None = None,
        fmt: ImageFormat | str = ImageFormat.JPEG,
    ) -> str:
        """Persist ``data`` and cache it. Returns the key used.

        A key is generated (with the format's extension) when none is given.
        Raises IOFailureError without touching the cache if the disk write fails.
        """
        final_key = key if key is not None else generate_key(fmt)

        # Disk first; a failed write leaves the cache untouched
        self._storage.write(final_key, data)
        self._cache.set(final_key, data)

        logger.info("Saved image '%s' (%d bytes)", final_key, len(data))
        return final_key

    def load(self, key: str) -> bytes:
        """Return the payload for ``key``, from cache when possible.

        Raises NotFoundError or IOFailureError from the disk store verbatim.
        """
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for '%s'", key)
            return cached

        logger.debug("Cache miss for '%s', reading from disk", key)
        data = self._storage.read(key)
        self._populate_cache(key, data)
        return data

    def load_image(self, key: str) -> DecodedImage:
        """Load and decode ``key`` with the configured codec."""
        if self._codec is None:
            raise UnsupportedCapabilityError("decode", "ImageManager has no codec configured")
        return self._codec.decode(self.load(key))

    def delete(self, key: str) -> None:
        """Remove ``key`` from cache and disk. The disk result is authoritative."""
        self._cache.remove(key)
        self._storage.delete(key)
        logger.info("Deleted image '%s'", key)

    def exists(self, key: str) -> bool:
        """True if ``key`` is on disk. Cache presence alone does not count."""
        return self._storage.exists(key)

    def clear_cache(self) -> None:
        """Drop every cached payload; disk is untouched.

        Hook this to whatever memory-pressure signal the host exposes.
        """
        self._cache.clear()
        logger.debug("Cleared memory cache")

    def remove_from_cache(self, key: str) -> None:
        self._cache.remove(key)

    def stats(self) -> CacheStats:
        return self._cache.stats()

    def _populate_cache(self, key: str, data: bytes) -> None:
        # Best effort: a read that reached disk must not fail on caching
        try:
            self._cache.set(key, data)
        except Exception as e:
            logger.warning("Could not cache '%s' after disk read: %s", key, e)
