"""Hourly time slots offered by the map's time selector."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Iterator

from envprobe.core.config import settings
from envprobe.models import TimeSlot

SLOTS_PER_DAY = 24


class InvalidTimeSlot(ValueError):
    """Raised when a slot is not one of the catalog's hourly values."""


class TimeSlotCatalog:
    """The 24 hourly slots of one reference day (UTC), fixed at construction."""

    def __init__(self, reference_day: date) -> None:
        self.reference_day = reference_day
        midnight = datetime.combine(reference_day, time(0, 0), tzinfo=timezone.utc)
        self._slots = tuple(TimeSlot(midnight + timedelta(hours=i)) for i in range(SLOTS_PER_DAY))
        self._index = {slot: slot for slot in self._slots}

    def all_slots(self) -> tuple[TimeSlot, ...]:
        return self._slots

    def default_slot(self) -> TimeSlot:
        return self._slots[0]

    def lookup(self, text: str) -> TimeSlot:
        """Parse a textual slot and make sure it belongs to this catalog."""

        try:
            slot = TimeSlot.parse(text)
        except (TypeError, ValueError) as exc:
            raise InvalidTimeSlot(f"malformed time slot: {text!r}") from exc
        if slot not in self._index:
            raise InvalidTimeSlot(f"time slot {text} is not offered for {self.reference_day}")
        return self._index[slot]

    def __contains__(self, slot: object) -> bool:
        return slot in self._index

    def __iter__(self) -> Iterator[TimeSlot]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)


@lru_cache(maxsize=1)
def default_catalog() -> TimeSlotCatalog:
    return TimeSlotCatalog(settings.reference_day)


__all__ = ["InvalidTimeSlot", "SLOTS_PER_DAY", "TimeSlotCatalog", "default_catalog"]
