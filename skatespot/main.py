"""
FastAPI application setup with dependency injection.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
import time
import uuid
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from skatespot.config.settings import Settings, get_settings
from skatespot.core.dependencies import ServiceContainer
from skatespot.core.error_handlers import setup_error_handlers
from skatespot.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings; defaults to the global settings
        container: Prebuilt service container, e.g. with in-memory storage

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level.value, settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build services on startup and release them on shutdown."""
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")

        service_container = container or ServiceContainer(settings)
        try:
            await service_container.initialize_services()
        except Exception as e:
            logger.error(f"Application startup failed: {e}", exc_info=True)
            raise
        app.state.service_container = service_container
        logger.info("Application startup complete")

        try:
            yield
        finally:
            logger.info("Shutting down application")
            await service_container.cleanup_services()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    error_handler = setup_error_handlers(app)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log requests and responses with timing information."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path}",
            extra={
                'request_id': request_id,
                'method': request.method,
                'path': request.url.path,
            }
        )

        response = await call_next(request)

        processing_time = (time.time() - start_time) * 1000

        logger.info(
            f"Request {request_id} completed: {response.status_code} ({processing_time:.2f}ms)",
            extra={
                'request_id': request_id,
                'status_code': response.status_code,
                'processing_time_ms': processing_time
            }
        )

        response.headers["X-Request-ID"] = request_id
        return response

    from skatespot.api import spots_router, check_ins_router, photos_router, geocoding_router
    app.include_router(spots_router)
    app.include_router(check_ins_router)
    app.include_router(photos_router)
    app.include_router(geocoding_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check reporting whether the store state is being persisted."""
        service_container = getattr(request.app.state, 'service_container', None)
        timestamp = datetime.now(timezone.utc).isoformat()

        if service_container is None:
            return {
                "status": "unhealthy",
                "message": "Service container not initialized",
                "version": settings.app_version,
                "timestamp": timestamp,
            }

        store = service_container.get_spot_store()
        repository = service_container.get_repository()
        storage_details = {
            "status": "healthy" if store.persistence_ok else "degraded",
            "name": repository.name,
        }
        if not store.persistence_ok:
            storage_details["warning"] = store.last_persist_error
            if repository.last_error is not None:
                storage_details["error"] = repository.last_error.message

        return {
            "status": "healthy" if store.persistence_ok else "degraded",
            "version": settings.app_version,
            "timestamp": timestamp,
            "details": {
                "storage": storage_details,
                "spots": len(store.spots),
                "check_ins": len(store.check_ins),
            },
            "error_statistics": error_handler.get_error_statistics(),
        }

    return app


# Create application instance
app = create_app()
