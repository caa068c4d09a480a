"""Time selector contents."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from envprobe.api.deps import get_catalog
from envprobe.api.schemas import SlotCatalog
from envprobe.services.timeslots import TimeSlotCatalog

router = APIRouter(prefix="/slots", tags=["query"])


@router.get("", response_model=SlotCatalog)
def list_slots(catalog: TimeSlotCatalog = Depends(get_catalog)) -> SlotCatalog:
    return SlotCatalog(
        reference_day=catalog.reference_day.isoformat(),
        slots=[str(slot) for slot in catalog.all_slots()],
        default=str(catalog.default_slot()),
    )


__all__ = ["router"]
