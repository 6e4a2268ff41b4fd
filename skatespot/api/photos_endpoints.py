"""
Photo upload endpoint - validates and compresses photos into data URIs
"""
import logging
from fastapi import APIRouter, Depends, File, UploadFile, status

from skatespot.core.dependencies import get_image_processor
from skatespot.schemas.base import Envelope
from skatespot.schemas.spot import PhotoUploadResponse
from skatespot.services.image_processor import ImageProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/photos", tags=["photos"])


@router.post("", response_model=Envelope[PhotoUploadResponse], status_code=status.HTTP_201_CREATED)
async def upload_photo(
    photo: UploadFile = File(..., description="Photo file (JPEG, PNG, WebP)"),
    processor: ImageProcessor = Depends(get_image_processor),
):
    """
    Compress a photo for a spot or check-in

    The returned **photoUrl** is passed unchanged when creating the spot or check-in.
    """
    image_data = await photo.read()
    processor.validate_image_file(photo.content_type, len(image_data))
    compressed = await processor.compress_image(image_data)

    return Envelope(
        status="ok",
        data=PhotoUploadResponse(
            photo_url=compressed.data_url,
            width=compressed.width,
            height=compressed.height,
            size_bytes=compressed.size_bytes,
        ),
    )
