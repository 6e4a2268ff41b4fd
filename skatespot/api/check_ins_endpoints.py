"""
Check-in API endpoints
"""
from fastapi import APIRouter, Depends

from skatespot.core.dependencies import get_spot_store
from skatespot.core.exceptions import CheckInNotFoundError
from skatespot.schemas.base import Envelope, Message
from skatespot.services.spot_store import SpotStore

router = APIRouter(prefix="/check-ins", tags=["check-ins"])


@router.delete("/{check_in_id}", response_model=Envelope[Message])
async def delete_check_in(check_in_id: str, store: SpotStore = Depends(get_spot_store)):
    """
    Remove a check-in, active or expired
    """
    if not any(c.id == check_in_id for c in store.check_ins):
        raise CheckInNotFoundError(check_in_id)
    store.remove_check_in(check_in_id)
    return Envelope(status="ok", data=Message(message=f"Check-in {check_in_id} removed"))
