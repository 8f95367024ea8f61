"""Pillow-backed codec producing JPEG output."""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from imagevault.codec.base import DecodedImage, ImageCodec, PixelBox
from imagevault.errors.exceptions import (
    InvalidImageDataError,
    TransformFailureError,
    UnsupportedCapabilityError,
)

logger = logging.getLogger(__name__)

# Modes the JPEG encoder can write directly
_JPEG_MODES = {"L", "RGB", "CMYK"}


def _quality_to_pillow(quality: float) -> int:
    """Map [0, 1] quality onto Pillow's 1-100 JPEG scale."""
    return max(1, min(100, round(quality * 100)))


class PillowCodec(ImageCodec):
    """Decodes anything Pillow can open; encodes JPEG."""

    name = "pillow"

    def decode(self, data: bytes) -> DecodedImage:
        try:
            img = Image.open(io.BytesIO(data))
            # Force a full decode so truncated payloads fail here
            img.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
            SyntaxError,
            EOFError,
        ) as e:
            raise InvalidImageDataError(original=e) from e
        w, h = img.size
        if w <= 0 or h <= 0:
            raise InvalidImageDataError(f"Image has empty dimensions {w}x{h}")
        logger.debug("Decoded %dx%d %s image", w, h, img.mode)
        return DecodedImage(pixels=img, width=w, height=h)

    def encode(self, image: DecodedImage, quality: float) -> bytes:
        if not _jpeg_plugin_available():
            raise UnsupportedCapabilityError("encode", "No JPEG encoder available in Pillow")

        img: Image.Image = image.pixels
        buf = io.BytesIO()
        try:
            if img.mode not in _JPEG_MODES:
                img = _flatten(img)
            img.save(buf, format="JPEG", quality=_quality_to_pillow(quality))
        except (OSError, ValueError, KeyError) as e:
            raise TransformFailureError(original=e) from e
        return buf.getvalue()

    def crop_pixels(self, image: DecodedImage, box: PixelBox) -> DecodedImage | None:
        left, top, right, bottom = box
        if left < 0 or top < 0 or right > image.width or bottom > image.height:
            return None
        if right <= left or bottom <= top:
            return None
        cropped = image.pixels.crop(box)
        return DecodedImage(
            pixels=cropped,
            width=right - left,
            height=bottom - top,
            density=image.density,
        )

    def render_scaled(self, image: DecodedImage, width: int, height: int) -> DecodedImage:
        resized = image.pixels.resize((width, height), Image.LANCZOS)
        return DecodedImage(pixels=resized, width=width, height=height, density=1.0)


def _jpeg_plugin_available() -> bool:
    Image.init()
    return "JPEG" in Image.SAVE


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any alpha over white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")
