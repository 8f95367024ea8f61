"""L2 durable store: one file per key under a base directory."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from imagevault.cache.keys import TEMP_PREFIX, TEMP_SUFFIX, is_temporary_name, validate_key
from imagevault.errors.exceptions import IOFailureError, NotFoundError

logger = logging.getLogger(__name__)

_DEFAULT_BASE_DIR = Path.home() / ".imagevault" / "images"


class DiskStore:
    """Key-addressed byte storage with atomic writes.

    The file name is the key verbatim. No in-process lock is needed:
    writes land under the key only through ``os.replace``.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else _DEFAULT_BASE_DIR
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # The first write reports the real failure
            logger.warning("Could not create storage directory %s: %s", self._base_dir, e)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, key: str) -> Path:
        return self._base_dir / validate_key(key)

    def write(self, key: str, data: bytes) -> None:
        """Atomically persist ``data`` under ``key``, replacing any previous payload."""
        path = self._resolve(key, "write")
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self._base_dir, prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            raise IOFailureError(key, "write", original=e) from e
        finally:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
        logger.debug("Wrote %d bytes to %s", len(data), path)

    def read(self, key: str) -> bytes:
        path = self._resolve(key, "read")
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(key) from e
        except OSError as e:
            raise IOFailureError(key, "read", original=e) from e

    def delete(self, key: str) -> None:
        path = self._resolve(key, "delete")
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise NotFoundError(key) from e
        except OSError as e:
            raise IOFailureError(key, "delete", original=e) from e
        logger.debug("Deleted %s", path)

    def exists(self, key: str) -> bool:
        try:
            return self.path_for(key).is_file()
        except (OSError, ValueError):
            return False

    def keys(self) -> list[str]:
        """List stored keys, excluding in-flight temporaries."""
        try:
            entries = sorted(self._base_dir.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise IOFailureError(str(self._base_dir), "list", original=e) from e
        return [
            p.name
            for p in entries
            if p.is_file() and not is_temporary_name(p.name)
        ]

    def _resolve(self, key: str, operation: str) -> Path:
        try:
            return self.path_for(key)
        except ValueError as e:
            raise IOFailureError(key, operation, original=e) from e