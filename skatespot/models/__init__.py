"""
Data models for the SkateSpot backend.
"""

from .spot import SpotType, Spot, CheckIn, StoreState
from .storage import KeyValueEntry

__all__ = [
    "SpotType",
    "Spot",
    "CheckIn",
    "StoreState",
    "KeyValueEntry",
]
