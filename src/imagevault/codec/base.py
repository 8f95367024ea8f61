"""Codec capability boundary: decode, encode, crop and scale pixel buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from imagevault.errors.exceptions import UnsupportedCapabilityError

# (left, top, right, bottom) in source pixels, right/bottom exclusive
PixelBox = tuple[int, int, int, int]


@dataclass(frozen=True)
class DecodedImage:
    """A decoded pixel buffer plus its geometry.

    ``width``/``height`` are pixel dimensions. ``density`` maps logical
    units to pixels, so the logical size is pixel size / density.
    """

    pixels: Any
    width: int
    height: int
    density: float = 1.0

    @property
    def logical_width(self) -> float:
        return self.width / self.density

    @property
    def logical_height(self) -> float:
        return self.height / self.density


class ImageCodec:
    """Host graphics capability.

    Subclasses supply whichever operations their backend supports; anything
    left unimplemented raises UnsupportedCapabilityError.
    """

    name = "base"

    def decode(self, data: bytes) -> DecodedImage:
        """Decode bytes; raise InvalidImageDataError if they are not an image."""
        raise UnsupportedCapabilityError("decode")

    def encode(self, image: DecodedImage, quality: float) -> bytes:
        """Encode lossily at ``quality`` in [0, 1]; raise TransformFailureError on failure."""
        raise UnsupportedCapabilityError("encode")

    def crop_pixels(self, image: DecodedImage, box: PixelBox) -> DecodedImage | None:
        """Crop to ``box``; return None if the region is not valid for this image."""
        raise UnsupportedCapabilityError("crop")

    def render_scaled(self, image: DecodedImage, width: int, height: int) -> DecodedImage:
        """Redraw at exactly ``width`` x ``height`` pixels with density 1.0."""
        raise UnsupportedCapabilityError("scale")
