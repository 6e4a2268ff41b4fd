from .base import Envelope, Message
from .spot import (
    SpotCreate,
    CheckInCreate,
    SpotSummary,
    SpotDetail,
    PhotoUploadResponse,
    AddressResult,
)

__all__ = [
    "Envelope",
    "Message",
    "SpotCreate",
    "CheckInCreate",
    "SpotSummary",
    "SpotDetail",
    "PhotoUploadResponse",
    "AddressResult",
]
