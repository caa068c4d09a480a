from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date

import pytest

from envprobe.models import ErrorKind, QueryKey, QueryState, Reading
from envprobe.services.coordinator import QueryCoordinator
from envprobe.services.fetcher import FetchError
from envprobe.services.timeslots import TimeSlotCatalog

REFERENCE_DAY = date(2025, 1, 1)


@dataclass
class PendingFetch:
    key: QueryKey
    future: asyncio.Future

    def resolve(self, kelvin: float = 300.0, wind_speed: float = 3.0, wind_direction: float = 90.0) -> None:
        if not self.future.done():
            self.future.set_result(
                Reading(
                    temperature_kelvin=kelvin,
                    wind_speed_mps=wind_speed,
                    wind_direction_degrees=wind_direction,
                )
            )

    def fail(self, kind: ErrorKind = ErrorKind.NETWORK_FAILURE) -> None:
        if not self.future.done():
            self.future.set_exception(FetchError(kind, "test failure"))

    def raise_(self, exc: BaseException) -> None:
        if not self.future.done():
            self.future.set_exception(exc)


class ControlledFetcher:
    """Fetcher whose calls stay pending until the test settles them.

    With ``ignore_cancel`` the fetch behaves like a transport that cannot be
    aborted: cancellation is noted but the call still completes with whatever
    the test resolves it to.
    """

    def __init__(self, ignore_cancel: bool = False) -> None:
        self.ignore_cancel = ignore_cancel
        self.calls: list[PendingFetch] = []
        self.cancel_requests = 0

    async def fetch(self, key: QueryKey) -> Reading:
        pending = PendingFetch(key, asyncio.get_running_loop().create_future())
        self.calls.append(pending)
        if not self.ignore_cancel:
            return await pending.future
        while True:
            try:
                return await asyncio.shield(pending.future)
            except asyncio.CancelledError:
                self.cancel_requests += 1


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks and done-callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class StateRecorder:
    def __init__(self) -> None:
        self.states: list[QueryState] = []

    def __call__(self, state: QueryState) -> None:
        self.states.append(state)


@pytest.fixture
def catalog() -> TimeSlotCatalog:
    return TimeSlotCatalog(REFERENCE_DAY)


@pytest.fixture
def fetcher() -> ControlledFetcher:
    return ControlledFetcher()


@pytest.fixture
def stubborn_fetcher() -> ControlledFetcher:
    return ControlledFetcher(ignore_cancel=True)


@pytest.fixture
def coordinator(fetcher: ControlledFetcher, catalog: TimeSlotCatalog) -> QueryCoordinator:
    return QueryCoordinator(fetcher, catalog=catalog)
