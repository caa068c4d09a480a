"""Log buffer endpoint for the map page's debug panel."""

from __future__ import annotations

from fastapi import APIRouter, Query

from envprobe.core.logging_config import get_log_buffer

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("")
def list_logs(
    limit: int = Query(100, ge=1, le=200),
    level: str | None = Query(None, max_length=16),
) -> dict[str, list[dict[str, str]]]:
    return {"logs": get_log_buffer(limit=limit, level=level)}


__all__ = ["router"]
