"""Map page route."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def map_page(request: Request) -> Any:
    """Render the clickable map with its time selector and result card."""

    settings = request.app.state.settings
    catalog = request.app.state.catalog
    return templates.TemplateResponse(
        request,
        "map.html",
        {
            "title": settings.app_name,
            "api_prefix": settings.api_prefix,
            "center": [settings.center_latitude, settings.center_longitude],
            "bounds": [
                [settings.min_latitude, settings.min_longitude],
                [settings.max_latitude, settings.max_longitude],
            ],
            "zoom": settings.map_zoom,
            "min_zoom": settings.min_zoom,
            "max_zoom": settings.max_zoom,
            "slots": [str(slot) for slot in catalog.all_slots()],
            "default_slot": str(catalog.default_slot()),
        },
    )


__all__ = ["router", "templates"]
