"""API dependencies."""

from __future__ import annotations

from fastapi import Request

from envprobe.services.coordinator import QueryCoordinator
from envprobe.services.timeslots import TimeSlotCatalog


def get_coordinator(request: Request) -> QueryCoordinator:
    return request.app.state.coordinator


def get_catalog(request: Request) -> TimeSlotCatalog:
    return request.app.state.catalog
