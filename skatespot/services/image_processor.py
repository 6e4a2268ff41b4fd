"""
Photo validation and compression for spot and check-in photos.

Uploaded photos are shrunk to a fixed width and re-encoded as JPEG so they
can be stored inline in the state blob as data URIs.
"""

import base64
import io
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from PIL import Image, ImageOps, UnidentifiedImageError

from skatespot.config.settings import ImageSettings
from skatespot.core.exceptions import (
    ImageCorruptedError,
    ImageTooLargeError,
    ImageValidationError,
)


@dataclass(frozen=True)
class CompressedImage:
    """JPEG data URI plus the dimensions it was encoded at"""
    data_url: str
    width: int
    height: int
    size_bytes: int


class ImageProcessor:
    """
    Validates uploaded photos and compresses them to inline data URIs.
    """

    MAX_WIDTH = 800
    JPEG_QUALITY = 70
    MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
    ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")

    def __init__(
        self,
        max_width: int = MAX_WIDTH,
        jpeg_quality: int = JPEG_QUALITY,
        max_file_size: int = MAX_FILE_SIZE,
        allowed_content_types: Sequence[str] = ALLOWED_CONTENT_TYPES,
    ):
        self.max_width = max_width
        self.jpeg_quality = jpeg_quality
        self.max_file_size = max_file_size
        self.allowed_content_types = tuple(t.lower() for t in allowed_content_types)
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, image_settings: ImageSettings) -> "ImageProcessor":
        return cls(
            max_width=image_settings.max_width,
            jpeg_quality=image_settings.jpeg_quality,
            max_file_size=image_settings.max_upload_bytes,
            allowed_content_types=image_settings.allowed_content_types,
        )

    def validate_image_file(self, content_type: Optional[str], size_bytes: int) -> None:
        """
        Check the declared content type and size of an upload.

        Args:
            content_type: MIME type reported by the client
            size_bytes: Upload size

        Raises:
            ImageValidationError: If the type is not an accepted image type
            ImageTooLargeError: If the upload exceeds the size limit
        """
        normalized = (content_type or "").split(";", 1)[0].strip().lower()
        if normalized not in self.allowed_content_types:
            raise ImageValidationError(
                f"Unsupported image type: {content_type or 'unknown'}. "
                f"Supported types: {', '.join(self.allowed_content_types)}",
                details={"content_type": content_type},
            )

        if size_bytes > self.max_file_size:
            raise ImageTooLargeError(
                size_mb=size_bytes / (1024 * 1024),
                max_size_mb=self.max_file_size // (1024 * 1024),
            )

    async def compress_image(self, image_data: bytes) -> CompressedImage:
        """
        Resize a photo to at most ``max_width`` pixels wide and encode it as JPEG.

        Args:
            image_data: Raw image bytes

        Returns:
            CompressedImage holding a ``data:image/jpeg;base64,...`` URL

        Raises:
            ImageCorruptedError: If the bytes cannot be decoded as an image
        """
        try:
            image = Image.open(io.BytesIO(image_data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageCorruptedError(details={"error": str(e)}) from e

        image = ImageOps.exif_transpose(image)
        if image.mode != "RGB":
            image = image.convert("RGB")

        width, height = image.size
        if width > self.max_width:
            ratio = self.max_width / width
            new_size = (self.max_width, max(1, round(height * ratio)))
            image = image.resize(new_size, Image.Resampling.LANCZOS)
            self.logger.debug(f"Resized image from {width}x{height} to {new_size}")

        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=self.jpeg_quality, optimize=True)
        encoded = buffer.getvalue()

        self.logger.info(
            f"Image compressed: {len(image_data)} -> {len(encoded)} bytes, "
            f"{image.width}x{image.height}"
        )

        return CompressedImage(
            data_url="data:image/jpeg;base64," + base64.b64encode(encoded).decode("ascii"),
            width=image.width,
            height=image.height,
            size_bytes=len(encoded),
        )
