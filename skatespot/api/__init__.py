# API endpoints and routers

from .spots_endpoints import router as spots_router
from .check_ins_endpoints import router as check_ins_router
from .photos_endpoints import router as photos_router
from .geocoding_endpoints import router as geocoding_router

__all__ = [
    "spots_router",
    "check_ins_router",
    "photos_router",
    "geocoding_router",
]
