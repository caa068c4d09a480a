"""Pydantic models for the mock station's responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LocationReading(BaseModel):
    """Payload of ``GET /location``; temperature is in Kelvin."""

    temperature: float
    wind_speed: float = Field(..., ge=0.0)
    wind_direction: float = Field(..., ge=0.0, lt=360.0)


__all__ = ["LocationReading"]
