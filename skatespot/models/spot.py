"""
Domain entities held by the spot store.

Field aliases follow the persisted layout (camelCase keys), so
``model_dump(by_alias=True)`` produces the stored blob shape directly.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SpotType(str, Enum):
    """Spot categories"""
    STREET = "Street"
    PARK = "Park"
    DOWNHILL = "Downhill"
    PLAZA = "Plaza"
    OTHER = "Other"

    @property
    def label(self) -> str:
        """Display label shown by the UI"""
        return _SPOT_TYPE_LABELS[self]


_SPOT_TYPE_LABELS = {
    SpotType.STREET: "Rua",
    SpotType.PARK: "Pista",
    SpotType.DOWNHILL: "Ladeira",
    SpotType.PLAZA: "Praça",
    SpotType.OTHER: "Outro",
}


def _as_utc(value: datetime) -> datetime:
    # Blobs written without an offset are read as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Spot(BaseModel):
    """A named, geolocated skate location"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    description: str = ""
    lat: float
    lng: float
    type: SpotType
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    # Never populated by add_spot; kept so stored blobs carrying it still load
    address: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return _as_utc(v)


class CheckIn(BaseModel):
    """A timestamped presence record tied to a spot"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    spot_id: str = Field(alias="spotId")
    skater_name: str = Field(alias="skaterName")
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return _as_utc(v)

    def is_active(self, now: datetime, window: timedelta) -> bool:
        """True while the check-in is younger than ``window`` (exclusive)."""
        return now - self.timestamp < window


class StoreState(BaseModel):
    """Everything the store persists, as one blob"""

    model_config = ConfigDict(populate_by_name=True)

    spots: List[Spot] = Field(default_factory=list)
    check_ins: List[CheckIn] = Field(default_factory=list, alias="checkIns")
