"""Domain value types."""

from .query import (
    KELVIN_OFFSET,
    Conditions,
    ErrorKind,
    Phase,
    QueryKey,
    QueryState,
    Reading,
    TimeSlot,
)

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
