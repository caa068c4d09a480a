"""Map interaction endpoints: clicks, time-slot changes and state updates."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from envprobe.api.deps import get_catalog, get_coordinator
from envprobe.api.schemas import QueryRequest, TimeSlotChange
from envprobe.models import QueryState, TimeSlot
from envprobe.services.coordinator import QueryCoordinator
from envprobe.services.timeslots import InvalidTimeSlot, TimeSlotCatalog

router = APIRouter(prefix="/query", tags=["query"])
logger = logging.getLogger(__name__)

KEEPALIVE_SECONDS = 15.0


def _resolve_slot(catalog: TimeSlotCatalog, text: str) -> TimeSlot:
    try:
        return catalog.lookup(text)
    except InvalidTimeSlot as exc:
        raise HTTPException(status_code=422, detail={"reason": "invalid_time_slot", "message": str(exc)}) from exc


def _event(state: QueryState) -> str:
    return f"event: state\ndata: {json.dumps(state.to_dict())}\n\n"


# Endpoints are async so the coordinator is only touched from the event loop.
@router.get("")
async def query_state(coordinator: QueryCoordinator = Depends(get_coordinator)) -> dict[str, Any]:
    return coordinator.current_state().to_dict()


@router.post("")
async def submit_query(
    payload: QueryRequest,
    coordinator: QueryCoordinator = Depends(get_coordinator),
    catalog: TimeSlotCatalog = Depends(get_catalog),
) -> dict[str, Any]:
    slot = _resolve_slot(catalog, payload.time_slot) if payload.time_slot else None
    return coordinator.submit(payload.latitude, payload.longitude, slot).to_dict()


@router.post("/time-slot")
async def change_time_slot(
    payload: TimeSlotChange,
    coordinator: QueryCoordinator = Depends(get_coordinator),
    catalog: TimeSlotCatalog = Depends(get_catalog),
) -> dict[str, Any]:
    slot = _resolve_slot(catalog, payload.time_slot)
    state = coordinator.change_time_slot(slot)
    return {**state.to_dict(), "pending_slot": str(coordinator.pending_slot)}


@router.get("/events")
async def query_events(
    request: Request,
    coordinator: QueryCoordinator = Depends(get_coordinator),
) -> StreamingResponse:
    """Server-sent events: the current state, then every change after it."""

    queue: asyncio.Queue[QueryState] = asyncio.Queue()
    unsubscribe = coordinator.subscribe(queue.put_nowait)

    async def stream() -> AsyncIterator[str]:
        try:
            yield _event(coordinator.current_state())
            while not await request.is_disconnected():
                try:
                    state = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield _event(state)
        finally:
            unsubscribe()
            logger.debug("State event stream closed")

    return StreamingResponse(stream(), media_type="text/event-stream")


__all__ = ["router"]
