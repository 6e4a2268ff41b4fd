"""
Services for the SkateSpot backend.
"""

from .storage import InMemoryStorage, JsonFileStorage, SqlKeyValueStorage, build_storage
from .state_repository import KeyValueStateRepository, StateRepository
from .spot_store import SpotStore
from .image_processor import ImageProcessor, CompressedImage
from .address_search_service import AddressSearchService

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "SqlKeyValueStorage",
    "build_storage",
    "KeyValueStateRepository",
    "StateRepository",
    "SpotStore",
    "ImageProcessor",
    "CompressedImage",
    "AddressSearchService",
]
