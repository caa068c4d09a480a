"""Pydantic models used by the query API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    # Range checks belong to the coordinator, which reports them as a failed query
    latitude: float
    longitude: float
    time_slot: str | None = Field(default=None, max_length=32)


class TimeSlotChange(BaseModel):
    time_slot: str = Field(..., min_length=1, max_length=32)


class SlotCatalog(BaseModel):
    reference_day: str
    slots: list[str]
    default: str


__all__ = ["QueryRequest", "TimeSlotChange", "SlotCatalog"]
