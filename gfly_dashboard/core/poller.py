"""
Telemetry poller for GFly Dashboard.
Fetches the device status on a fixed cadence with at most one request in
flight, and keeps the latest good snapshot.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from ..data.models import TelemetrySnapshot
from ..config.settings import settings
from ..utils.events import EventType, publish_event

# Configure logger
logger = logging.getLogger("gfly_dashboard.core.poller")

FetchStatus = Callable[[], Awaitable[TelemetrySnapshot]]


class PollerState:
    """
    The poller's shared state: latest snapshot and the fetching flag.

    Consumers get read-only properties. Only TelemetryPoller calls the
    underscore mutators, which keeps a single writer.
    """

    def __init__(self):
        self._latest_snapshot: Optional[TelemetrySnapshot] = None
        self._is_fetching = False
        self._last_update_time: Optional[float] = None
        self._fetch_count = 0
        self._failure_count = 0
        self._consecutive_failures = 0

    @property
    def latest_snapshot(self) -> Optional[TelemetrySnapshot]:
        return self._latest_snapshot

    @property
    def is_fetching(self) -> bool:
        return self._is_fetching

    @property
    def last_update_time(self) -> Optional[float]:
        """time.monotonic() of the last successful update"""
        return self._last_update_time

    @property
    def fetch_count(self) -> int:
        return self._fetch_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    def seconds_since_update(self, now: Optional[float] = None) -> Optional[float]:
        if self._last_update_time is None:
            return None
        if now is None:
            now = time.monotonic()
        return now - self._last_update_time

    def _begin_fetch(self) -> None:
        self._is_fetching = True
        self._fetch_count += 1

    def _apply_success(self, snapshot: TelemetrySnapshot) -> None:
        self._latest_snapshot = snapshot
        self._last_update_time = time.monotonic()
        self._consecutive_failures = 0

    def _apply_failure(self) -> None:
        self._failure_count += 1
        self._consecutive_failures += 1

    def _end_fetch(self) -> None:
        self._is_fetching = False

    def __repr__(self) -> str:
        return (f"PollerState(latest_snapshot={'set' if self._latest_snapshot else None}, "
                f"is_fetching={self._is_fetching})")


class TelemetryPoller:
    """
    Drives the status fetch from a repeating timer.

    Every tick launches a fetch only when none is outstanding. The fetch runs
    as its own task, so a slow device never delays the timer, and a tick that
    finds a fetch in flight does nothing. Failures leave the last snapshot in
    place; the next tick is the retry.
    """

    def __init__(self,
                 fetch_status: FetchStatus,
                 interval_ms: Optional[int] = None,
                 state: Optional[PollerState] = None):
        """
        Initialize the poller.

        Args:
            fetch_status: Coroutine function returning a fresh snapshot, raising on failure
            interval_ms: Tick period in milliseconds (default: from settings)
            state: State object to write to (creates one if None)
        """
        self._fetch_status = fetch_status
        self.interval_ms = interval_ms if interval_ms is not None else settings.get('poll_interval_ms')
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be positive")

        self._state = state or PollerState()
        self._timer_task: Optional[asyncio.Task] = None
        self._fetch_task: Optional[asyncio.Task] = None
        self._run_id = 0
        self.running = False

        logger.info(f"Telemetry poller initialized with {self.interval_ms} ms interval")

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def interval(self) -> float:
        """Tick period in seconds"""
        return self.interval_ms / 1000.0

    async def start(self) -> bool:
        """
        Start the timer. The first tick happens immediately.

        Returns:
            bool: True if started, False if already running
        """
        if self.running:
            logger.warning("Telemetry poller already running")
            return False

        self._run_id += 1
        self.running = True
        self._timer_task = asyncio.create_task(self._timer_loop())
        logger.info("Telemetry poller started")

        await publish_event(
            EventType.POLLER_STARTED,
            {'interval_ms': self.interval_ms},
            'TelemetryPoller'
        )
        return True

    async def stop(self) -> bool:
        """
        Cancel the timer. An outstanding fetch keeps running, but its result
        is discarded.

        Returns:
            bool: True if stopped, False if it was not running
        """
        if not self.running:
            logger.warning("Telemetry poller not running")
            return False

        self.running = False
        if self._timer_task:
            self._timer_task.cancel()
            try:
                await self._timer_task
            except asyncio.CancelledError:
                pass
            self._timer_task = None

        logger.info("Telemetry poller stopped")
        await publish_event(EventType.POLLER_STOPPED, {}, 'TelemetryPoller')
        return True

    async def wait_idle(self) -> None:
        """Wait for the outstanding fetch, if there is one, to finish"""
        task = self._fetch_task
        if task and not task.done():
            await asyncio.shield(task)

    def tick(self) -> bool:
        """
        One timer tick.

        Returns:
            bool: True if a fetch was launched, False if the poller is stopped
            or a fetch is already in flight
        """
        if not self.running:
            return False
        if self._state.is_fetching:
            logger.debug("Fetch still in flight, skipping tick")
            return False

        self._state._begin_fetch()
        self._fetch_task = asyncio.create_task(self._fetch(self._run_id))
        return True

    async def _timer_loop(self) -> None:
        """Fixed-rate timer: each tick is scheduled from the previous one"""
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        try:
            while self.running:
                self.tick()
                next_tick += self.interval
                delay = next_tick - loop.time()
                if delay < 0:
                    # Fell behind (e.g. suspended); resync instead of bursting
                    next_tick = loop.time()
                    delay = 0
                await asyncio.sleep(delay)
        except asyncio.CancelledError:
            logger.debug("Poller timer cancelled")
            raise

    async def _fetch(self, run_id: int) -> None:
        """Run one fetch and apply its outcome, unless the run has ended"""
        try:
            snapshot = await self._fetch_status()
        except asyncio.CancelledError:
            self._state._end_fetch()
            raise
        except Exception as e:
            self._state._end_fetch()
            if self._is_current(run_id):
                await self._handle_failure(e)
            return

        self._state._end_fetch()
        if not self._is_current(run_id):
            logger.debug("Poller stopped during fetch, discarding snapshot")
            return

        recovered = self._state.consecutive_failures > 0
        self._state._apply_success(snapshot)
        if recovered:
            logger.info("Device status available again")

        await publish_event(
            EventType.SNAPSHOT_UPDATED,
            {'snapshot': snapshot.to_dict()},
            'TelemetryPoller'
        )

    def _is_current(self, run_id: int) -> bool:
        return self.running and run_id == self._run_id

    async def _handle_failure(self, error: Exception) -> None:
        self._state._apply_failure()

        # Only the first failure of a streak is worth a warning
        if self._state.consecutive_failures == 1:
            logger.warning(f"Status fetch failed, keeping last snapshot: {error}")
        else:
            logger.debug(f"Status fetch failed ({self._state.consecutive_failures} in a row): {error}")

        await publish_event(
            EventType.FETCH_FAILED,
            {
                'message': str(error),
                'consecutive_failures': self._state.consecutive_failures
            },
            'TelemetryPoller'
        )


# Factory function to create a poller
def create_poller(fetch_status: FetchStatus,
                  interval_ms: Optional[int] = None,
                  state: Optional[PollerState] = None) -> TelemetryPoller:
    """
    Create a new telemetry poller.

    Args:
        fetch_status: Coroutine function returning a fresh snapshot
        interval_ms: Tick period in milliseconds (default: from settings)
        state: State object to write to (creates one if None)

    Returns:
        TelemetryPoller: A new, not yet started poller
    """
    return TelemetryPoller(fetch_status, interval_ms, state)


async def start_poller(interval_ms: int, fetch_status: FetchStatus) -> TelemetryPoller:
    """Create and start a poller; the poller itself is the handle"""
    poller = create_poller(fetch_status, interval_ms)
    await poller.start()
    return poller


async def stop_poller(handle: TelemetryPoller) -> None:
    """Stop a poller returned by start_poller"""
    await handle.stop()
