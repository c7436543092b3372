# LivePoller.py
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

import settings
from Sample import Sample
from SeriesStore import SeriesStore

logger = logging.getLogger(__name__)

# fetch(test_id, system, from_idx, limit) -> samples with idx > from_idx, ascending
FetchFn = Callable[[int, int, int, int], List[Sample]]


class PollerState(Enum):
    IDLE = "idle"
    ARMED = "armed"


class TickStatus(Enum):
    IDLE = "idle"
    SKIPPED = "skipped"     # previous fetch still in flight
    EMPTY = "empty"
    APPENDED = "appended"
    STALE = "stale"         # session ended while fetching
    ERROR = "error"


@dataclass
class TickResult:
    status: TickStatus
    rows: int = 0
    error: Optional[str] = None


class LiveHandle:
    """Returned by ``LivePoller.start``; stopping it ends that live session only."""

    def __init__(self, poller: "LivePoller", session: int):
        self._poller = poller
        self.session = session

    @property
    def active(self) -> bool:
        return self._poller.state is PollerState.ARMED and self._poller.session == self.session

    def stop(self) -> None:
        if self.active:
            self._poller.stop()


class LivePoller:
    """
    Idle/Armed polling state machine over a SeriesStore.

    The caller drives it: while armed, call ``tick()`` once per period
    (``interval_ms``). Each tick issues at most one fetch starting after the
    store cursor; a tick that finds a fetch still outstanding is skipped.
    Fetch errors are kept in ``last_error`` and the poller stays armed.
    """

    def __init__(
        self,
        fetch: FetchFn,
        store: Optional[SeriesStore] = None,
        *,
        interval_ms: int = settings.POLL_INTERVAL_MS,
        batch_limit: int = settings.LIVE_BATCH_LIMIT,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.fetch = fetch
        self.store = store if store is not None else SeriesStore()
        self.interval_ms = interval_ms
        self.batch_limit = batch_limit
        self.clock = clock

        self.state = PollerState.IDLE
        self.test_id: Optional[int] = None
        self.system: int = settings.SYSTEMS[0]
        self.session: Optional[int] = None
        self.last_error: Optional[str] = None
        self._in_flight = threading.Lock()

    @property
    def armed(self) -> bool:
        return self.state is PollerState.ARMED

    @property
    def last_updated(self) -> Optional[datetime]:
        return self.store.last_updated

    # -----------------
    # Selection
    # -----------------
    def select(self, test_id: Optional[int], system: int) -> None:
        """Change the (test, system) pair; the accumulated series is dropped on change."""
        if (test_id, system) == (self.test_id, self.system):
            return
        if self.armed:
            raise RuntimeError("cannot change test or system while live")
        if system not in settings.SYSTEMS:
            raise ValueError(f"unknown system {system!r}")
        self.test_id = test_id
        self.system = system
        self.store.reset()
        self.last_error = None

    # -----------------
    # Lifecycle
    # -----------------
    def start(self, test_id: Optional[int] = None, system: Optional[int] = None) -> LiveHandle:
        if test_id is not None or system is not None:
            self.select(
                self.test_id if test_id is None else test_id,
                self.system if system is None else system,
            )
        if self.test_id is None:
            raise ValueError("no test selected")
        if self.armed:
            self.stop()

        self.session = self.store.reset()
        self.last_error = None
        self.state = PollerState.ARMED
        logger.info("live started: test=%s system=%s session=%s", self.test_id, self.system, self.session)
        return LiveHandle(self, self.session)

    def stop(self) -> None:
        if not self.armed:
            return
        logger.info("live stopped: test=%s system=%s rows=%d", self.test_id, self.system, len(self.store))
        self.state = PollerState.IDLE
        self.session = None

    # -----------------
    # Polling
    # -----------------
    def tick(self) -> TickResult:
        if not self.armed:
            return TickResult(TickStatus.IDLE)
        if not self._in_flight.acquire(blocking=False):
            logger.debug("tick skipped, fetch still in flight")
            return TickResult(TickStatus.SKIPPED)

        try:
            session = self.session
            test_id, system, from_idx = self.test_id, self.system, self.store.cursor
            try:
                batch = self.fetch(test_id, system, from_idx, self.batch_limit)
            except Exception as exc:
                # transient: stay armed, next tick retries
                if self.session != session:
                    return TickResult(TickStatus.STALE)
                self.last_error = str(exc)
                logger.warning("live fetch failed (test=%s system=%s from_idx=%s): %s",
                               test_id, system, from_idx, exc)
                return TickResult(TickStatus.ERROR, error=self.last_error)

            if self.session != session or self.store.session != session:
                logger.debug("discarding %d rows from stopped session %s", len(batch), session)
                return TickResult(TickStatus.STALE)
            try:
                appended = self.store.append(batch, session=session)
            except ValueError as exc:
                # overlapping batch from the backend; store is left untouched
                self.last_error = str(exc)
                logger.warning("live batch rejected (test=%s system=%s from_idx=%s): %s",
                               test_id, system, from_idx, exc)
                return TickResult(TickStatus.ERROR, error=self.last_error)

            self.last_error = None
            if not appended:
                return TickResult(TickStatus.EMPTY)

            self.store.last_updated = self.clock()
            logger.debug("appended %d rows, cursor=%d", len(batch), self.store.cursor)
            return TickResult(TickStatus.APPENDED, rows=len(batch))
        finally:
            self._in_flight.release()
