import io

import numpy as np
import pytest
from PIL import Image


def _encode(img: Image.Image, fmt: str = "JPEG") -> bytes:
    buf = io.BytesIO()
    if fmt == "JPEG":
        img.save(buf, format=fmt, quality=100)
    else:
        img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def make_image():
    """Factory for solid-colour test images at a given size."""

    def _make(
        width: int,
        height: int,
        color: tuple = (0, 0, 255),
        fmt: str = "JPEG",
    ) -> bytes:
        return _encode(Image.new("RGB", (width, height), color), fmt)

    return _make


@pytest.fixture
def noisy_image_bytes():
    """Random-noise PNG, so JPEG quality visibly changes output size."""
    rng = np.random.default_rng(0)
    arr = rng.integers(0, 256, (256, 256, 3), dtype=np.uint8)
    return _encode(Image.fromarray(arr), "PNG")


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    import base64
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4"
        "nGP4z8BQDwAEgAF/pooBPQAAAABJRU5ErkJggg=="
    )
