"""Latest-wins coordination of map queries.

Every click or time-slot change is a new *generation*. Issuing one cancels
the fetch of the previous generation, and when a fetch finishes its outcome
is applied only if its generation is still the current one. Cancellation
frees the connection early; the generation check is what keeps the displayed
state right, even when a superseded request completes anyway.

The coordinator is not thread-safe. ``submit`` and ``change_time_slot`` must
be called from the event loop that runs the fetches, which is also where the
done-callbacks that apply outcomes run.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import replace
from typing import Callable

from envprobe.models import Conditions, ErrorKind, Phase, QueryKey, QueryState, TimeSlot
from envprobe.services.fetcher import FetchError, LocationFetcher
from envprobe.services.normalizer import InvalidCoordinate, Normalizer
from envprobe.services.timeslots import InvalidTimeSlot, TimeSlotCatalog

logger = logging.getLogger(__name__)

StateListener = Callable[[QueryState], None]


class QueryCoordinator:
    """Owns the query state machine for one map session."""

    def __init__(
        self,
        fetcher: LocationFetcher,
        normalizer: Normalizer | None = None,
        catalog: TimeSlotCatalog | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.normalizer = normalizer or Normalizer(catalog)
        self._state = QueryState()
        self._pending_slot = self.normalizer.catalog.default_slot()
        self._last_click: tuple[float, float] | None = None
        self._task: asyncio.Task | None = None
        self._listeners: list[StateListener] = []

    # Public API ---------------------------------------------------------
    def current_state(self) -> QueryState:
        return self._state

    @property
    def pending_slot(self) -> TimeSlot:
        return self._pending_slot

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def submit(self, raw_lat: float, raw_lng: float, time_slot: TimeSlot | None = None) -> QueryState:
        """Start a query for a clicked point, superseding whatever is running."""

        slot = time_slot or self._pending_slot
        generation = self._state.generation + 1
        try:
            key = self.normalizer.normalize(raw_lat, raw_lng, slot)
        except InvalidCoordinate as exc:
            logger.info("Rejected click for generation %s: %s", generation, exc)
            self._pending_slot = slot
            self._supersede()
            self._transition(
                QueryState(phase=Phase.FAILED, error=ErrorKind.INVALID_COORDINATE, generation=generation)
            )
            return self._state

        loop = asyncio.get_running_loop()
        self._pending_slot = slot
        self._last_click = (raw_lat, raw_lng)
        self._supersede()
        self._transition(QueryState(selected_key=key, phase=Phase.LOADING, generation=generation))
        logger.info("Issuing generation %s for %s", generation, key.to_dict())

        task = loop.create_task(self.fetcher.fetch(key), name=f"envprobe-fetch-{generation}")
        task.add_done_callback(functools.partial(self._on_fetch_done, generation, key))
        self._task = task
        return self._state

    def change_time_slot(self, time_slot: TimeSlot) -> QueryState:
        """Pick another hour; re-queries the last clicked point if there is one."""

        if self._last_click is None:
            if time_slot not in self.normalizer.catalog:
                raise InvalidTimeSlot(f"time slot {time_slot} is not in the catalog")
            self._pending_slot = time_slot
            logger.debug("No location selected yet; pending slot is now %s", time_slot)
            return self._state
        raw_lat, raw_lng = self._last_click
        return self.submit(raw_lat, raw_lng, time_slot)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns the unsubscribe hook."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def aclose(self) -> None:
        task = self._supersede()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    # Helpers ------------------------------------------------------------
    def _supersede(self) -> asyncio.Task | None:
        task, self._task = self._task, None
        if task is None or task.done():
            return None
        logger.debug("Cancelling superseded fetch %s", task.get_name())
        task.cancel()
        return task

    def _on_fetch_done(self, generation: int, key: QueryKey, task: asyncio.Task) -> None:
        if self._task is task:
            self._task = None
        if task.cancelled():
            logger.debug("Fetch for generation %s cancelled", generation)
            return
        exc = task.exception()
        current = self._state.generation
        if generation != current:
            logger.debug("Discarding outcome of generation %s (current is %s)", generation, current)
            return

        if exc is None:
            conditions = Conditions.from_reading(task.result())
            self._transition(replace(self._state, phase=Phase.SUCCEEDED, result=conditions))
            logger.info("Generation %s resolved", generation)
            return

        if isinstance(exc, FetchError):
            if exc.kind is ErrorKind.CANCELLED:
                logger.debug("Fetch for generation %s reported cancellation", generation)
                return
            kind = exc.kind
            logger.warning("Generation %s failed: %s (%s)", generation, kind.value, exc.detail)
        else:
            kind = ErrorKind.NETWORK_FAILURE
            logger.error("Fetcher raised unexpectedly for generation %s", generation, exc_info=exc)
        self._transition(QueryState(selected_key=key, phase=Phase.FAILED, error=kind, generation=generation))

    def _transition(self, state: QueryState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)


__all__ = ["QueryCoordinator", "StateListener"]
