"""
Spot API endpoints - spot listing, creation, removal and check-ins
"""
from typing import List
from fastapi import APIRouter, Depends, status

from skatespot.core.dependencies import get_spot_store
from skatespot.core.exceptions import SpotNotFoundError
from skatespot.models.spot import Spot, CheckIn
from skatespot.schemas.base import Envelope, Message
from skatespot.schemas.spot import SpotCreate, CheckInCreate, SpotSummary, SpotDetail
from skatespot.services.spot_store import SpotStore

router = APIRouter(prefix="/spots", tags=["spots"])


def _require_spot(store: SpotStore, spot_id: str) -> Spot:
    spot = store.get_spot(spot_id)
    if spot is None:
        raise SpotNotFoundError(spot_id)
    return spot


@router.get("", response_model=Envelope[List[SpotSummary]])
async def list_spots(store: SpotStore = Depends(get_spot_store)):
    """
    List all spots in creation order with their active check-in count
    """
    summaries = [
        SpotSummary(
            **spot.model_dump(),
            active_check_in_count=store.count_active_check_ins(spot.id),
            type_label=spot.type.label,
        )
        for spot in store.spots
    ]
    return Envelope(status="ok", data=summaries)


@router.post("", response_model=Envelope[Spot], status_code=status.HTTP_201_CREATED)
async def create_spot(
    spot_data: SpotCreate,
    store: SpotStore = Depends(get_spot_store),
):
    """
    Create a new spot

    - **name**: At least 2 characters
    - **type**: Street, Park, Downhill, Plaza or Other
    - **lat** / **lng**: Position picked on the map
    - **photoUrl**: Optional data URI from `POST /photos`
    """
    spot = store.add_spot(spot_data)
    return Envelope(status="ok", data=spot)


@router.get("/{spot_id}", response_model=Envelope[SpotDetail])
async def get_spot(spot_id: str, store: SpotStore = Depends(get_spot_store)):
    """
    Get a spot with its active check-ins
    """
    spot = _require_spot(store, spot_id)
    detail = SpotDetail(
        spot=spot,
        type_label=spot.type.label,
        active_check_ins=store.get_active_check_ins(spot.id),
    )
    return Envelope(status="ok", data=detail)


@router.delete("/{spot_id}", response_model=Envelope[Message])
async def delete_spot(spot_id: str, store: SpotStore = Depends(get_spot_store)):
    """
    Delete a spot together with all of its check-ins
    """
    _require_spot(store, spot_id)
    store.remove_spot(spot_id)
    return Envelope(status="ok", data=Message(message=f"Spot {spot_id} removed"))


@router.get("/{spot_id}/check-ins", response_model=Envelope[List[CheckIn]])
async def list_active_check_ins(spot_id: str, store: SpotStore = Depends(get_spot_store)):
    """
    List check-ins made at the spot during the expiry window, oldest first
    """
    _require_spot(store, spot_id)
    return Envelope(status="ok", data=store.get_active_check_ins(spot_id))


@router.post(
    "/{spot_id}/check-ins",
    response_model=Envelope[CheckIn],
    status_code=status.HTTP_201_CREATED,
)
async def create_check_in(
    spot_id: str,
    check_in_data: CheckInCreate,
    store: SpotStore = Depends(get_spot_store),
):
    """
    Check in at a spot

    - **skaterName**: Optional; anonymous when empty
    - **photoUrl**: Optional data URI
    """
    _require_spot(store, spot_id)
    check_in = store.add_check_in(spot_id, check_in_data)
    return Envelope(status="ok", data=check_in)
