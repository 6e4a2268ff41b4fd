"""
Unit tests for photo validation and compression
"""
import base64
import io

import pytest
from PIL import Image

from skatespot.config.settings import ImageSettings
from skatespot.core.exceptions import (
    ImageCorruptedError,
    ImageTooLargeError,
    ImageValidationError,
)
from skatespot.services.image_processor import ImageProcessor


def _image_bytes(size=(1600, 1200), mode="RGB", fmt="PNG", color="grey"):
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def _decode(data_url):
    prefix = "data:image/jpeg;base64,"
    assert data_url.startswith(prefix)
    return Image.open(io.BytesIO(base64.b64decode(data_url[len(prefix):])))


class TestValidateImageFile:

    @pytest.mark.parametrize("content_type", ["image/jpeg", "image/jpg", "image/png", "image/webp", "IMAGE/PNG"])
    def test_accepted_types(self, content_type):
        ImageProcessor().validate_image_file(content_type, 1024)

    @pytest.mark.parametrize("content_type", ["image/gif", "application/pdf", "", None])
    def test_rejected_types(self, content_type):
        with pytest.raises(ImageValidationError):
            ImageProcessor().validate_image_file(content_type, 1024)

    def test_size_limit(self):
        processor = ImageProcessor()
        processor.validate_image_file("image/png", 5 * 1024 * 1024)

        with pytest.raises(ImageTooLargeError) as exc_info:
            processor.validate_image_file("image/png", 5 * 1024 * 1024 + 1)

        assert exc_info.value.status_code == 413
        assert exc_info.value.details["max_size_mb"] == 5

    def test_from_settings(self):
        processor = ImageProcessor.from_settings(
            ImageSettings(max_width=400, jpeg_quality=50, max_upload_mb=1, allowed_content_types="image/png")
        )

        assert processor.max_width == 400
        assert processor.jpeg_quality == 50
        assert processor.max_file_size == 1024 * 1024
        with pytest.raises(ImageValidationError):
            processor.validate_image_file("image/jpeg", 10)


class TestCompressImage:

    @pytest.mark.asyncio
    async def test_wide_image_scaled_to_max_width(self):
        result = await ImageProcessor().compress_image(_image_bytes((1600, 1200)))

        assert (result.width, result.height) == (800, 600)
        decoded = _decode(result.data_url)
        assert decoded.format == "JPEG"
        assert decoded.size == (800, 600)
        assert result.size_bytes > 0

    @pytest.mark.asyncio
    async def test_small_image_not_upscaled(self):
        result = await ImageProcessor().compress_image(_image_bytes((320, 200)))

        assert (result.width, result.height) == (320, 200)

    @pytest.mark.asyncio
    async def test_transparent_png_converted_to_rgb(self):
        data = _image_bytes((100, 100), mode="RGBA", color=(255, 0, 0, 128))

        result = await ImageProcessor().compress_image(data)

        assert _decode(result.data_url).mode == "RGB"

    @pytest.mark.asyncio
    async def test_corrupted_bytes(self):
        with pytest.raises(ImageCorruptedError):
            await ImageProcessor().compress_image(b"definitely not an image")
