"""Tests for the crop / resize / encode pipeline."""

import io

import pytest
from PIL import Image
from pydantic import ValidationError

from imagevault.codec.base import DecodedImage, ImageCodec
from imagevault.errors.exceptions import (
    InvalidImageDataError,
    TransformFailureError,
    UnsupportedCapabilityError,
)
from imagevault.transform.config import TransformConfig
from imagevault.transform.transformer import ImageTransformer


def _size(data: bytes) -> tuple[int, int]:
    return Image.open(io.BytesIO(data)).size


class _GeometryCodec(ImageCodec):
    """Codec without pixels: tracks geometry and encodes it as text."""

    def __init__(self, density: float = 1.0, crop_fails: bool = False) -> None:
        self.density = density
        self.crop_fails = crop_fails
        self.crop_calls: list[tuple[int, int, int, int]] = []
        self.scale_calls: list[tuple[int, int]] = []

    def decode(self, data: bytes) -> DecodedImage:
        w, h = (int(v) for v in data.decode().split("x"))
        return DecodedImage(pixels=None, width=w, height=h, density=self.density)

    def encode(self, image: DecodedImage, quality: float) -> bytes:
        return f"{image.width}x{image.height}@{image.density}".encode()

    def crop_pixels(self, image, box):
        self.crop_calls.append(box)
        if self.crop_fails:
            return None
        left, top, right, bottom = box
        return DecodedImage(None, right - left, bottom - top, image.density)

    def render_scaled(self, image, width, height):
        self.scale_calls.append((width, height))
        return DecodedImage(None, width, height, 1.0)


class TestCrop:
    def test_crop_to_square(self, make_image):
        data = make_image(1600, 900)
        result = ImageTransformer().transform(
            data, TransformConfig(crop_ratio=1.0, compression_quality=1.0)
        )
        assert _size(result) == (900, 900)

    def test_crop_square_to_widescreen(self, make_image):
        data = make_image(1000, 1000)
        result = ImageTransformer().transform(
            data, TransformConfig(crop_ratio=16 / 9, compression_quality=1.0)
        )
        w, h = _size(result)
        assert w == 1000
        assert w / h == pytest.approx(16 / 9, abs=0.01)

    def test_matching_ratio_not_cropped(self, make_image):
        data = make_image(1600, 900)
        result = ImageTransformer().transform(
            data, TransformConfig(crop_ratio=16 / 9, compression_quality=1.0)
        )
        assert _size(result) == (1600, 900)

    def test_crop_is_centered(self):
        img = Image.new("RGB", (300, 100), (255, 0, 0))
        img.paste((0, 255, 0), (100, 0, 200, 100))
        buf = io.BytesIO()
        img.save(buf, format="PNG")

        result = ImageTransformer().transform(
            buf.getvalue(), TransformConfig(crop_ratio=1.0, compression_quality=1.0)
        )
        out = Image.open(io.BytesIO(result)).convert("RGB")
        assert out.size == (100, 100)
        r, g, b = out.getpixel((50, 50))
        assert g > 200 and r < 60

    def test_density_maps_logical_crop_to_pixels(self):
        codec = _GeometryCodec(density=2.0)
        result = ImageTransformer(codec).transform(b"3200x1800", TransformConfig(crop_ratio=1.0))
        assert codec.crop_calls == [(700, 0, 2500, 1800)]
        assert result == b"1800x1800@2.0"

    def test_failed_crop_returns_image_unmodified(self):
        codec = _GeometryCodec(crop_fails=True)
        result = ImageTransformer(codec).transform(b"1600x900", TransformConfig(crop_ratio=1.0))
        assert len(codec.crop_calls) == 1
        assert result == b"1600x900@1.0"


class TestResize:
    def test_resize_to_max_dimension(self, make_image):
        data = make_image(2000, 1500)
        result = ImageTransformer().transform(
            data, TransformConfig(compression_quality=1.0, max_dimension=1000)
        )
        assert _size(result) == (1000, 750)

    def test_no_upscale(self, make_image):
        data = make_image(500, 400)
        result = ImageTransformer().transform(
            data, TransformConfig(compression_quality=1.0, max_dimension=1000)
        )
        assert _size(result) == (500, 400)

    def test_portrait(self, make_image):
        data = make_image(600, 1200)
        result = ImageTransformer().transform(data, TransformConfig(max_dimension=300))
        assert _size(result) == (150, 300)

    def test_resize_uses_logical_size_and_renders_at_1x(self):
        codec = _GeometryCodec(density=2.0)
        # Logical 1000x750 already fits
        assert ImageTransformer(codec).transform(
            b"2000x1500", TransformConfig(max_dimension=1000)
        ) == b"2000x1500@2.0"
        # Logical 1000x750 shrinks to 500x375 pixels at density 1
        assert ImageTransformer(codec).transform(
            b"2000x1500", TransformConfig(max_dimension=500)
        ) == b"500x375@1.0"
        assert codec.scale_calls == [(500, 375)]

    def test_idempotent(self, make_image):
        config = TransformConfig(max_dimension=640)
        transformer = ImageTransformer()
        once = transformer.transform(make_image(1920, 1080), config)
        twice = transformer.transform(once, config)
        assert _size(once) == _size(twice) == (640, 360)


class TestCombined:
    def test_crop_then_resize(self, make_image):
        data = make_image(2000, 1500)
        config = TransformConfig(crop_ratio=1.0, compression_quality=0.8, max_dimension=800)
        assert _size(ImageTransformer().transform(data, config)) == (800, 800)

    def test_all_transforms(self, make_image):
        data = make_image(3840, 2160)
        config = TransformConfig(crop_ratio=1.0, compression_quality=0.7, max_dimension=1024)
        result = ImageTransformer().transform(data, config)
        assert _size(result) == (1024, 1024)
        assert len(result) < len(data)

    def test_crop_happens_before_resize(self):
        codec = _GeometryCodec()
        ImageTransformer(codec).transform(
            b"2000x1000", TransformConfig(crop_ratio=1.0, max_dimension=500)
        )
        assert codec.crop_calls == [(500, 0, 1500, 1000)]
        assert codec.scale_calls == [(500, 500)]

    def test_transform_image_accepts_decoded(self):
        codec = _GeometryCodec()
        image = DecodedImage(None, 1200, 600)
        result = ImageTransformer(codec).transform_image(image, TransformConfig(crop_ratio=2.0))
        assert result == b"1200x600@1.0"
        assert codec.crop_calls == []


class TestCompression:
    def test_lower_quality_is_smaller(self, noisy_image_bytes):
        transformer = ImageTransformer()
        sizes = [
            len(transformer.transform(noisy_image_bytes, TransformConfig(compression_quality=q)))
            for q in (0.1, 0.5, 1.0)
        ]
        assert sizes[0] < sizes[1] < sizes[2]

    def test_output_is_jpeg(self, make_image):
        result = ImageTransformer().transform(make_image(64, 64, fmt="PNG"))
        assert Image.open(io.BytesIO(result)).format == "JPEG"

    def test_default_quality(self):
        assert TransformConfig().compression_quality == 0.8


class TestErrors:
    def test_invalid_data(self):
        with pytest.raises(InvalidImageDataError):
            ImageTransformer().transform(b"not an image", TransformConfig())

    def test_empty_data(self):
        with pytest.raises(InvalidImageDataError):
            ImageTransformer().transform(b"")

    def test_truncated_data(self, noisy_image_bytes):
        jpeg = ImageTransformer().transform(noisy_image_bytes)
        with pytest.raises(InvalidImageDataError):
            ImageTransformer().transform(jpeg[: len(jpeg) // 2])

    def test_encode_failure_propagates(self):
        class _BrokenEncoder(_GeometryCodec):
            def encode(self, image, quality):
                raise TransformFailureError()

        with pytest.raises(TransformFailureError):
            ImageTransformer(_BrokenEncoder()).transform(b"10x10")

    def test_missing_capability(self):
        with pytest.raises(UnsupportedCapabilityError):
            ImageTransformer(ImageCodec()).transform(b"anything")


class TestTransformConfig:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"crop_ratio": 0},
            {"crop_ratio": -1.0},
            {"max_dimension": 0},
            {"compression_quality": 1.5},
            {"compression_quality": -0.1},
        ],
    )
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            TransformConfig(**kwargs)

    def test_frozen(self):
        config = TransformConfig(crop_ratio=1.0)
        with pytest.raises(ValidationError):
            config.crop_ratio = 2.0
