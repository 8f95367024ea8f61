"""Image transformer: crop to ratio, cap dimensions, re-encode.

Stages always run in this order, each only when its setting is present:

    decode → crop_to_ratio → resize_to_max_dimension → encode
"""

from __future__ import annotations

import logging

from imagevault.codec.base import DecodedImage, ImageCodec
from imagevault.codec.pillow import PillowCodec
from imagevault.transform.config import TransformConfig
from imagevault.transform.geometry import crop_rect_for_ratio, scaled_size, to_pixel_box

logger = logging.getLogger(__name__)


class ImageTransformer:
    """Pure transformation over image bytes, separate from storage and caching."""

    def __init__(self, codec: ImageCodec | None = None) -> None:
        self._codec = codec or PillowCodec()

    @property
    def codec(self) -> ImageCodec:
        return self._codec

    def transform(self, data: bytes, config: TransformConfig | None = None) -> bytes:
        """Transform encoded image bytes and return the re-encoded result.

        Raises InvalidImageDataError when ``data`` cannot be decoded and
        TransformFailureError when the result cannot be encoded.
        """
        image = self._codec.decode(data)
        return self.transform_image(image, config)

    def transform_image(
        self, image: DecodedImage, config: TransformConfig | None = None
    ) -> bytes:
        """Transform an already-decoded image and return encoded bytes."""
        config = config or TransformConfig()
        result = self.apply_geometry(image, config)
        return self._codec.encode(result, config.compression_quality)

    def apply_geometry(self, image: DecodedImage, config: TransformConfig) -> DecodedImage:
        """Run the crop and resize stages without encoding."""
        result = image
        if config.crop_ratio is not None:
            result = self.crop_to_ratio(result, config.crop_ratio)
        if config.max_dimension is not None:
            result = self.resize(result, config.max_dimension)
        return result

    def crop_to_ratio(self, image: DecodedImage, ratio: float) -> DecodedImage:
        rect = crop_rect_for_ratio(image.logical_width, image.logical_height, ratio)
        if rect is None:
            return image

        box = to_pixel_box(rect, image.density)
        cropped = self._codec.crop_pixels(image, box)
        if cropped is None:
            logger.warning(
                "Crop to %s failed for %dx%d image, leaving it uncropped",
                box, image.width, image.height,
            )
            return image

        logger.debug(
            "Cropped %dx%d -> %dx%d (ratio %.4f)",
            image.width, image.height, cropped.width, cropped.height, ratio,
        )
        return cropped

    def resize(self, image: DecodedImage, max_dimension: float) -> DecodedImage:
        target = scaled_size(image.logical_width, image.logical_height, max_dimension)
        if target is None:
            return image

        width, height = target
        resized = self._codec.render_scaled(image, width, height)
        logger.debug(
            "Resized %dx%d -> %dx%d (max %s)",
            image.width, image.height, width, height, max_dimension,
        )
        return resized
