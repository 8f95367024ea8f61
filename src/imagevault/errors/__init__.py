"""Error handling: typed failures for storage, caching and transforms."""

from imagevault.errors.exceptions import (
    ImageVaultError,
    InvalidImageDataError,
    IOFailureError,
    NotFoundError,
    TransformFailureError,
    UnsupportedCapabilityError,
)

__all__ = [
    "ImageVaultError",
    "NotFoundError",
    "InvalidImageDataError",
    "IOFailureError",
    "TransformFailureError",
    "UnsupportedCapabilityError",
]
