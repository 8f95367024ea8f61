"""Storage key generation and validation."""

from __future__ import annotations

import uuid
from enum import StrEnum

# Name pattern reserved for in-flight atomic-write temporaries
TEMP_PREFIX = ".imagevault-"
TEMP_SUFFIX = ".tmp"


class ImageFormat(StrEnum):
    JPEG = "jpeg"
    PNG = "png"
    HEIC = "heic"
    GIF = "gif"
    WEBP = "webp"

    @property
    def file_extension(self) -> str:
        if self is ImageFormat.JPEG:
            return "jpg"
        return self.value


def file_extension(fmt: ImageFormat | str) -> str:
    """Resolve the file extension for a known format or a custom one."""
    if isinstance(fmt, ImageFormat):
        return fmt.file_extension
    try:
        return ImageFormat(fmt.lower()).file_extension
    except ValueError:
        # Custom extension; tolerate a leading dot
        return fmt[1:] if fmt.startswith(".") else fmt


def generate_key(fmt: ImageFormat | str = ImageFormat.JPEG) -> str:
    """Generate a globally-unique storage key, e.g. ``"<uuid4>.jpg"``."""
    ext = file_extension(fmt)
    name = str(uuid.uuid4()).upper()
    return f"{name}.{ext}" if ext else name


def validate_key(key: str) -> str:
    """Ensure a key maps to exactly one file directly under the base directory.

    Raises ValueError for empty keys, ``.``/``..``, path separators, NUL and
    names reserved for write temporaries.
    """
    if not key or key in {".", ".."}:
        raise ValueError(f"Invalid storage key: {key!r}")
    if "/" in key or "\\" in key or "\x00" in key:
        raise ValueError(f"Storage key must not contain path separators: {key!r}")
    if is_temporary_name(key):
        raise ValueError(f"Storage key uses the reserved temporary-file pattern: {key!r}")
    return key


def is_temporary_name(name: str) -> bool:
    return name.startswith(TEMP_PREFIX) and name.endswith(TEMP_SUFFIX)
