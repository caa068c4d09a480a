"""Value types shared by the normalizer, the fetcher and the coordinator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from email.utils import format_datetime
from enum import Enum
from typing import Any

KELVIN_OFFSET = 273.15

_SLOT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Failure categories surfaced to the map card."""

    INVALID_COORDINATE = "invalid_coordinate"
    NETWORK_FAILURE = "network_failure"
    NO_DATA = "no_data"
    CANCELLED = "cancelled"


@dataclass(frozen=True, order=True)
class TimeSlot:
    """One selectable hour, always held in UTC."""

    at: datetime

    def __post_init__(self) -> None:
        if self.at.tzinfo is None:
            raise ValueError("time slots must be timezone-aware")
        object.__setattr__(self, "at", self.at.astimezone(timezone.utc))

    @classmethod
    def parse(cls, text: str) -> "TimeSlot":
        return cls(datetime.strptime(text, _SLOT_FORMAT).replace(tzinfo=timezone.utc))

    def rfc1123(self) -> str:
        return format_datetime(self.at, usegmt=True)

    def __str__(self) -> str:
        return self.at.strftime(_SLOT_FORMAT)


@dataclass(frozen=True)
class QueryKey:
    latitude: Decimal
    longitude: Decimal
    timestamp: TimeSlot

    def to_dict(self) -> dict[str, Any]:
        return {
            "latitude": str(self.latitude),
            "longitude": str(self.longitude),
            "timestamp": str(self.timestamp),
        }


@dataclass(frozen=True)
class Reading:
    """Raw values as reported by the weather service."""

    temperature_kelvin: float
    wind_speed_mps: float
    wind_direction_degrees: float


@dataclass(frozen=True)
class Conditions:
    temperature_celsius: float
    wind_speed_mps: float
    wind_direction_degrees: float

    @classmethod
    def from_reading(cls, reading: Reading) -> "Conditions":
        return cls(
            temperature_celsius=reading.temperature_kelvin - KELVIN_OFFSET,
            wind_speed_mps=reading.wind_speed_mps,
            wind_direction_degrees=reading.wind_direction_degrees,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "temperature_celsius": self.temperature_celsius,
            "wind_speed_mps": self.wind_speed_mps,
            "wind_direction_degrees": self.wind_direction_degrees,
            "display": {
                "temperature": f"{self.temperature_celsius:.2f}",
                "wind_speed": f"{self.wind_speed_mps:.2f}",
                "wind_direction": f"{self.wind_direction_degrees:.0f}",
            },
        }


@dataclass(frozen=True)
class QueryState:
    """Snapshot of the coordinator's state handed to readers and subscribers."""

    selected_key: QueryKey | None = None
    phase: Phase = Phase.IDLE
    result: Conditions | None = None
    error: ErrorKind | None = None
    generation: int = 0

    def __post_init__(self) -> None:
        if (self.result is not None) != (self.phase is Phase.SUCCEEDED):
            raise ValueError("result must be set exactly when the query succeeded")
        if (self.error is not None) != (self.phase is Phase.FAILED):
            raise ValueError("error must be set exactly when the query failed")

    def to_dict(self) -> dict[str, Any]:
        return {
            "selected_key": self.selected_key.to_dict() if self.selected_key else None,
            "phase": self.phase.value,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error.value if self.error else None,
            "generation": self.generation,
        }


__all__ = [
    "KELVIN_OFFSET",
    "Conditions",
    "ErrorKind",
    "Phase",
    "QueryKey",
    "QueryState",
    "Reading",
    "TimeSlot",
]
