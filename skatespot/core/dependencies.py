"""
Dependency injection setup for FastAPI.
Provides dependency providers for core services with lifecycle management.
"""

from fastapi import Depends, Request, HTTPException
from datetime import timedelta
from typing import Optional
import asyncio
import logging

import httpx

from skatespot.config.settings import Settings, get_settings
from skatespot.core.clock import Clock, utc_now
from skatespot.services.storage import KeyValueStorage, build_storage
from skatespot.services.state_repository import KeyValueStateRepository
from skatespot.services.spot_store import SpotStore
from skatespot.services.image_processor import ImageProcessor
from skatespot.services.address_search_service import AddressSearchService


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for managing application services with lifecycle management.

    One SpotStore is built per container; every request shares it.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[KeyValueStorage] = None,
        clock: Clock = utc_now,
        geocoding_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._storage_override = storage
        self._clock = clock
        self._geocoding_transport = geocoding_transport
        self._repository: Optional[KeyValueStateRepository] = None
        self._spot_store: Optional[SpotStore] = None
        self._image_processor: Optional[ImageProcessor] = None
        self._address_search_service: Optional[AddressSearchService] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    async def initialize_services(self) -> None:
        """Build storage, load the persisted state and create leaf services."""
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info("Initializing service container")

            storage = self._storage_override or build_storage(self.settings.storage)
            self._repository = KeyValueStateRepository(storage, self.settings.storage.name)
            self._spot_store = SpotStore(
                self._repository,
                clock=self._clock,
                expiry=timedelta(hours=self.settings.check_ins.expiry_hours),
                anonymous_name=self.settings.check_ins.anonymous_name,
            )
            self._image_processor = ImageProcessor.from_settings(self.settings.images)
            self._address_search_service = AddressSearchService(
                self.settings.geocoding,
                transport=self._geocoding_transport,
            )

            self._initialized = True
            logger.info(
                "Service container initialization completed",
                extra={
                    "storage_backend": type(storage).__name__,
                    "spots": len(self._spot_store.spots),
                },
            )

    async def cleanup_services(self) -> None:
        """Drop service references; the store has already persisted every mutation."""
        logger.info("Cleaning up service container")
        self._address_search_service = None
        self._image_processor = None
        self._spot_store = None
        self._repository = None
        self._initialized = False

    def get_spot_store(self) -> SpotStore:
        if self._spot_store is None:
            raise RuntimeError("Spot store not initialized")
        return self._spot_store

    def get_repository(self) -> KeyValueStateRepository:
        if self._repository is None:
            raise RuntimeError("State repository not initialized")
        return self._repository

    def get_image_processor(self) -> ImageProcessor:
        if self._image_processor is None:
            raise RuntimeError("Image processor not initialized")
        return self._image_processor

    def get_address_search_service(self) -> AddressSearchService:
        if self._address_search_service is None:
            raise RuntimeError("Address search service not initialized")
        return self._address_search_service


def get_service_container(request: Request) -> ServiceContainer:
    """
    Get the service container from application state.

    Raises:
        HTTPException: If service container is not available
    """
    if not hasattr(request.app.state, 'service_container'):
        logger.error("Service container not initialized")
        raise HTTPException(
            status_code=500,
            detail="Service container not available"
        )

    return request.app.state.service_container


def get_spot_store(
    container: ServiceContainer = Depends(get_service_container)
) -> SpotStore:
    try:
        return container.get_spot_store()
    except RuntimeError as e:
        logger.error(f"Spot store not available: {e}")
        raise HTTPException(status_code=500, detail="Spot store not available")


def get_image_processor(
    container: ServiceContainer = Depends(get_service_container)
) -> ImageProcessor:
    try:
        return container.get_image_processor()
    except RuntimeError as e:
        logger.error(f"Image processor not available: {e}")
        raise HTTPException(status_code=500, detail="Image processor not available")


def get_address_search_service(
    container: ServiceContainer = Depends(get_service_container)
) -> AddressSearchService:
    try:
        return container.get_address_search_service()
    except RuntimeError as e:
        logger.error(f"Address search service not available: {e}")
        raise HTTPException(status_code=500, detail="Address search service not available")
