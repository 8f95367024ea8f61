"""Image codec capability and its Pillow implementation."""

from imagevault.codec.base import DecodedImage, ImageCodec, PixelBox
from imagevault.codec.pillow import PillowCodec

__all__ = ["DecodedImage", "ImageCodec", "PillowCodec", "PixelBox"]
