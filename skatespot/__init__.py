"""SkateSpot backend: skate spots on a map with expiring check-ins."""

__version__ = "1.0.0"
