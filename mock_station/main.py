"""Mock weather station FastAPI service.

Serves deterministic synthetic readings so the map can be exercised without
the real service: a diurnal temperature curve with a north-south gradient,
and wind that varies smoothly with position and hour.
"""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, HTTPException, Query, Request

from envprobe.core.logging_config import setup_logging

from .config import settings
from .models import LocationReading

logger = logging.getLogger("mock_station")

app = FastAPI(title="Mock Weather Station", version="0.1.0")

KELVIN_OFFSET = 273.15


async def log_middleware(request: Request, call_next: Callable[[Request], Awaitable[Any]]):
    logger.info("%s %s", request.method, request.url.path)
    response = await call_next(request)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


app.middleware("http")(log_middleware)


@app.on_event("startup")
def _configure_logging() -> None:
    setup_logging("mock-station", settings.log_level)


def _parse_time(text: str | None) -> datetime:
    if text is None:
        return datetime.now(timezone.utc)
    try:
        moment = parsedate_to_datetime(text)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=422, detail={"reason": "invalid_time", "value": text}) from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def synthesize(latitude: float, longitude: float, moment: datetime) -> LocationReading:
    hour = moment.hour + moment.minute / 60.0
    # Warmest mid-afternoon, a few degrees cooler toward the northern edge
    diurnal = 6.0 * math.sin(2 * math.pi * (hour - 9.0) / 24.0)
    span = max(settings.max_latitude - settings.min_latitude, 1e-6)
    gradient = -4.0 * (latitude - settings.min_latitude) / span
    temperature = KELVIN_OFFSET + 18.0 + diurnal + gradient

    wind_speed = 1.5 + 2.5 * abs(math.sin(latitude * 7.0 + longitude * 3.0 + hour / 4.0))
    heading = math.degrees(math.atan2(math.sin(longitude * 5.0 + hour / 6.0), math.cos(latitude * 5.0)))
    return LocationReading(
        temperature=round(temperature, 2),
        wind_speed=round(wind_speed, 2),
        wind_direction=round(heading % 360.0, 1) % 360.0,
    )


@app.get("/location", response_model=LocationReading)
async def location(
    latitude: float = Query(..., alias="lat", ge=-90.0, le=90.0),
    longitude: float = Query(..., alias="long", ge=-180.0, le=180.0),
    at: str | None = Query(None, alias="time"),
) -> LocationReading:
    """Return the reading for a point and hour, or 404 outside the covered area."""
    moment = _parse_time(at)
    if settings.latency_seconds > 0:
        await asyncio.sleep(settings.latency_seconds)
    if not settings.covers(latitude, longitude):
        logger.info("No coverage at lat=%s long=%s", latitude, longitude)
        raise HTTPException(status_code=404, detail={"reason": "no_data"})
    return synthesize(latitude, longitude, moment)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["app", "synthesize"]


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("mock_station.main:app", host="0.0.0.0", port=settings.port, reload=False)
