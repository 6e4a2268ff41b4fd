"""
Custom exceptions for the SkateSpot backend.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Lookup errors
    SPOT_NOT_FOUND = "SPOT_NOT_FOUND"
    CHECK_IN_NOT_FOUND = "CHECK_IN_NOT_FOUND"

    # Image validation errors
    INVALID_IMAGE_FORMAT = "INVALID_IMAGE_FORMAT"
    IMAGE_TOO_LARGE = "IMAGE_TOO_LARGE"
    IMAGE_CORRUPTED = "IMAGE_CORRUPTED"

    # Collaborator errors
    GEOCODING_FAILED = "GEOCODING_FAILED"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"

    # Generic errors
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class SkateSpotException(Exception):
    """Base exception for the SkateSpot backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class SpotNotFoundError(SkateSpotException):
    """Raised when a spot id does not resolve."""

    def __init__(self, spot_id: str):
        super().__init__(
            message=f"Spot '{spot_id}' not found",
            error_code=ErrorCode.SPOT_NOT_FOUND,
            details={"spot_id": spot_id},
            status_code=404
        )


class CheckInNotFoundError(SkateSpotException):
    """Raised when a check-in id does not resolve."""

    def __init__(self, check_in_id: str):
        super().__init__(
            message=f"Check-in '{check_in_id}' not found",
            error_code=ErrorCode.CHECK_IN_NOT_FOUND,
            details={"check_in_id": check_in_id},
            status_code=404
        )


class ImageValidationError(SkateSpotException):
    """Raised when an uploaded photo has an unsupported type."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_IMAGE_FORMAT,
            details=details,
            status_code=400
        )


class ImageTooLargeError(SkateSpotException):
    """Raised when uploaded photo exceeds size limits."""

    def __init__(self, size_mb: float, max_size_mb: int):
        super().__init__(
            message=f"Image size {size_mb:.1f}MB exceeds maximum allowed size of {max_size_mb}MB",
            error_code=ErrorCode.IMAGE_TOO_LARGE,
            details={"size_mb": size_mb, "max_size_mb": max_size_mb},
            status_code=413
        )


class ImageCorruptedError(SkateSpotException):
    """Raised when image is corrupted or unreadable."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Image is corrupted or unreadable",
            error_code=ErrorCode.IMAGE_CORRUPTED,
            details=details,
            status_code=400
        )


class GeocodingError(SkateSpotException):
    """Raised when the address search provider fails."""

    def __init__(self, message: str = "Address search failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.GEOCODING_FAILED,
            details=details,
            status_code=502
        )


class StorageError(SkateSpotException):
    """
    Raised by storage backends when a read or write cannot complete.
    The state repository catches it; it never escapes a store mutation.
    """

    def __init__(self, name: str, message: str = "Storage unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"{message} ({name})",
            error_code=ErrorCode.STORAGE_UNAVAILABLE,
            details=details or {"name": name},
            status_code=503
        )
        self.name = name
