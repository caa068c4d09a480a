"""Service-layer utilities."""

from .coordinator import QueryCoordinator
from .fetcher import FetchError, HttpLocationFetcher, LocationFetcher
from .normalizer import InvalidCoordinate, Normalizer, normalize
from .timeslots import InvalidTimeSlot, TimeSlotCatalog, default_catalog

__all__ = [
    "QueryCoordinator",
    "FetchError",
    "HttpLocationFetcher",
    "LocationFetcher",
    "InvalidCoordinate",
    "Normalizer",
    "normalize",
    "InvalidTimeSlot",
    "TimeSlotCatalog",
    "default_catalog",
]
