"""Custom exception hierarchy for imagevault."""

from __future__ import annotations

from typing import Any


class ImageVaultError(Exception):
    """Base exception for all imagevault errors."""

    retryable: bool = False

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ImageVaultError):
    """No payload exists under the key at the queried layer."""

    def __init__(self, key: str, message: str = "") -> None:
        super().__init__(message or f"Image '{key}' not found")
        self.key = key


class InvalidImageDataError(ImageVaultError):
    """Bytes could not be decoded as an image (malformed or unsupported)."""

    def __init__(
        self,
        message: str = "Could not decode image data",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.original = original


class IOFailureError(ImageVaultError):
    """Filesystem error during write, read or delete. Safe to retry.

    Examples: permission denied, disk full, path too long.
    """

    retryable = True

    def __init__(
        self,
        key: str,
        operation: str,
        original: Exception | None = None,
    ) -> None:
        detail = f": {original}" if original is not None else ""
        super().__init__(f"Failed to {operation} image '{key}'{detail}")
        self.key = key
        self.operation = operation
        self.original = original


class TransformFailureError(ImageVaultError):
    """Encoding failed after a successful decode/crop/resize."""

    def __init__(
        self,
        message: str = "Failed to transform image",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.original = original


class UnsupportedCapabilityError(ImageVaultError):
    """The environment lacks a required collaborator (e.g. no JPEG encoder)."""

    def __init__(self, capability: str, message: str = "") -> None:
        super().__init__(
            message or f"Capability '{capability}' is not available in this environment"
        )
        self.capability = capability
