"""
Address search endpoint used to jump the map to a typed address
"""
from typing import List
from fastapi import APIRouter, Depends, Query

from skatespot.core.dependencies import get_address_search_service
from skatespot.schemas.base import Envelope
from skatespot.schemas.spot import AddressResult
from skatespot.services.address_search_service import AddressSearchService

router = APIRouter(prefix="/geocoding", tags=["geocoding"])


@router.get("/search", response_model=Envelope[List[AddressResult]])
async def search_address(
    q: str = Query(..., max_length=200, description="Free-text address"),
    service: AddressSearchService = Depends(get_address_search_service),
):
    """
    Search addresses; queries shorter than 3 characters return no results
    """
    results = await service.search(q)
    return Envelope(status="ok", data=results)
