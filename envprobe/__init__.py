"""envprobe FastAPI application package."""

import logging

from fastapi import FastAPI

from .api import api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .dashboard_router import router as dashboard_router
from .services.coordinator import QueryCoordinator
from .services.fetcher import HttpLocationFetcher, LocationFetcher
from .services.timeslots import TimeSlotCatalog


def create_app(fetcher: LocationFetcher | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the app around one coordinator; tests inject their own fetcher."""

    settings = settings or default_settings
    setup_logging(settings.app_name, settings.log_level)
    logger = logging.getLogger(__name__)
    catalog = TimeSlotCatalog(settings.reference_day)
    http_fetcher = None
    if fetcher is None:
        http_fetcher = HttpLocationFetcher(settings.weather_api_url, settings.weather_api_timeout)
        fetcher = http_fetcher
    logger.info("Initializing %s against %s", settings.app_name, settings.weather_api_url)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.coordinator = QueryCoordinator(fetcher, catalog=catalog)
    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(dashboard_router)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        await app.state.coordinator.aclose()
        if http_fetcher is not None:
            await http_fetcher.aclose()

    return app


__all__ = ["create_app"]
