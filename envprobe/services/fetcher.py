"""Weather service client used by the query coordinator."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from envprobe.core.config import settings
from envprobe.models import ErrorKind, QueryKey, Reading

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """A fetch ended without a reading; ``kind`` is what the user gets to see."""

    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


class LocationFetcher(Protocol):
    """One round trip to the weather service per query key.

    Implementations are awaited inside an ``asyncio.Task``; cancelling that
    task is how a superseded query is told to stop.
    """

    async def fetch(self, key: QueryKey) -> Reading: ...


class HttpLocationFetcher:
    """Query ``GET /location`` on the weather service with httpx."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.weather_api_url).rstrip("/")
        self.timeout = timeout or settings.weather_api_timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.timeout)

    def _params(self, key: QueryKey) -> dict[str, str]:
        return {
            "lat": f"{key.latitude:.2f}",
            "long": f"{key.longitude:.2f}",
            "time": key.timestamp.rfc1123(),
        }

    async def fetch(self, key: QueryKey) -> Reading:
        url = f"{self.base_url}/location"
        params = self._params(key)
        logger.debug("Weather request: GET %s params=%s", url, params)
        try:
            response = await self.client.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                logger.info("No reading for %s (%s)", key.to_dict(), exc.response.text[:200])
                raise FetchError(ErrorKind.NO_DATA, f"HTTP {status}") from exc
            logger.warning("Weather service error: %s %s", status, exc.response.text[:500])
            raise FetchError(ErrorKind.NETWORK_FAILURE, f"HTTP {status}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Weather service unreachable (%s): %s", url, exc)
            raise FetchError(ErrorKind.NETWORK_FAILURE, str(exc)) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Weather service returned malformed JSON: %s", response.text[:500])
            raise FetchError(ErrorKind.NETWORK_FAILURE, "malformed payload") from exc
        return self._parse(payload)

    def _parse(self, payload: Any) -> Reading:
        if not isinstance(payload, dict):
            raise FetchError(ErrorKind.NO_DATA, "empty payload")
        values = {
            name: self._coerce_float(payload.get(name))
            for name in ("temperature", "wind_speed", "wind_direction")
        }
        missing = sorted(name for name, value in values.items() if value is None)
        if missing:
            logger.info("Weather payload lacks %s", ", ".join(missing))
            raise FetchError(ErrorKind.NO_DATA, f"missing {', '.join(missing)}")
        return Reading(
            temperature_kelvin=values["temperature"],
            wind_speed_mps=values["wind_speed"],
            wind_direction_degrees=values["wind_direction"],
        )

    def _coerce_float(self, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


__all__ = ["FetchError", "HttpLocationFetcher", "LocationFetcher"]
