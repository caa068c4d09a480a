"""Turn raw click coordinates and a time slot into a canonical query key."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from envprobe.models import QueryKey, TimeSlot
from envprobe.services.timeslots import InvalidTimeSlot, TimeSlotCatalog, default_catalog

# Precision the weather service indexes its readings at
COORDINATE_QUANTUM = Decimal("0.01")


class InvalidCoordinate(ValueError):
    """Raised for latitudes/longitudes outside the globe or not numbers at all."""


def quantize(value: float) -> Decimal:
    """Round to two decimals, halves away from zero.

    The float goes through its shortest repr first so that ``1.005`` rounds to
    ``1.01`` as a user reading the number would expect, not to ``1.00`` as its
    binary expansion would.
    """

    rounded = Decimal(repr(float(value))).quantize(COORDINATE_QUANTUM, rounding=ROUND_HALF_UP)
    # -0.001 and 0.001 are the same grid cell
    return rounded.copy_abs() if rounded.is_zero() else rounded


def _checked(value: float, name: str, bound: int) -> Decimal:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinate(f"{name} is not a number: {value!r}") from exc
    if not math.isfinite(number) or not -bound <= number <= bound:
        raise InvalidCoordinate(f"{name} {value!r} outside [-{bound}, {bound}]")
    return quantize(number)


class Normalizer:
    def __init__(self, catalog: TimeSlotCatalog | None = None) -> None:
        self.catalog = catalog or default_catalog()

    def normalize(self, raw_lat: float, raw_lng: float, time_slot: TimeSlot) -> QueryKey:
        if time_slot not in self.catalog:
            raise InvalidTimeSlot(f"time slot {time_slot} is not in the catalog")
        latitude = _checked(raw_lat, "latitude", 90)
        longitude = _checked(raw_lng, "longitude", 180)
        return QueryKey(latitude=latitude, longitude=longitude, timestamp=time_slot)


def normalize(raw_lat: float, raw_lng: float, time_slot: TimeSlot) -> QueryKey:
    return Normalizer().normalize(raw_lat, raw_lng, time_slot)


__all__ = ["COORDINATE_QUANTUM", "InvalidCoordinate", "Normalizer", "normalize", "quantize"]
