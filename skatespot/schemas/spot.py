"""
Spot and check-in schemas for API requests/responses
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from skatespot.models.spot import Spot, CheckIn, SpotType


class SpotCreate(BaseModel):
    """Schema for creating a new spot; id and createdAt are assigned by the store"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=2, max_length=120)
    description: str = Field(default="", max_length=2000)
    type: SpotType = SpotType.STREET
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    lat: float
    lng: float


class CheckInCreate(BaseModel):
    """Schema for creating a check-in; an empty name falls back to the anonymous placeholder"""
    model_config = ConfigDict(populate_by_name=True)

    skater_name: Optional[str] = Field(default=None, alias="skaterName", max_length=80)
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")


class SpotSummary(Spot):
    """Spot list entry with the number of currently active check-ins"""
    active_check_in_count: int = Field(default=0, alias="activeCheckInCount")
    type_label: str = Field(default="", alias="typeLabel")


class SpotDetail(BaseModel):
    """Spot with its active check-ins"""
    model_config = ConfigDict(populate_by_name=True)

    spot: Spot
    type_label: str = Field(alias="typeLabel")
    active_check_ins: List[CheckIn] = Field(default_factory=list, alias="activeCheckIns")


class PhotoUploadResponse(BaseModel):
    """Compressed photo ready to be stored as photoUrl"""
    model_config = ConfigDict(populate_by_name=True)

    photo_url: str = Field(alias="photoUrl")
    width: int
    height: int
    size_bytes: int = Field(alias="sizeBytes")


class AddressResult(BaseModel):
    """One address search hit"""
    display_name: str = Field(alias="displayName")
    lat: float
    lng: float

    model_config = ConfigDict(populate_by_name=True)
