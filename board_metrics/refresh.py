"""
Refresh loop driving one resource collector.

Each cycle goes Idle -> Querying -> Writing -> Idle. Cycles run one after
another with a fixed pause in between, so they never overlap. An empty
acquisition skips Writing and leaves the previous metrics visible.
"""

import asyncio
from enum import Enum
from typing import Generic, TypeVar

from .collectors.base import ResourceCollector
from .const import DEFAULT_REFRESH_INTERVAL, FAULT_BACKOFF_INITIAL, FAULT_BACKOFF_MAX
from .logging import get_logger
from .store import MetricsStore
from .telemetry import RefreshTelemetry

logger = get_logger("refresh")

T = TypeVar("T")


class RefreshState(Enum):
    """Refresh loop state."""
    IDLE = "idle"
    QUERYING = "querying"
    WRITING = "writing"


class RefreshLoop(Generic[T]):
    """Periodically acquires objects from a collector and writes them to a store."""

    def __init__(
        self,
        collector: ResourceCollector[T],
        store: MetricsStore[T],
        interval: float = DEFAULT_REFRESH_INTERVAL,
        telemetry: RefreshTelemetry | None = None,
    ):
        """
        Args:
            collector: Source of domain objects
            store: Destination of rendered metrics
            interval: Pause between the end of one cycle and the next, in seconds
            telemetry: Optional error and object counters
        """
        self.collector = collector
        self.store = store
        self.interval = interval
        self.telemetry = telemetry

        self._state = RefreshState.IDLE
        self._backoff = FAULT_BACKOFF_INITIAL
        self._max_backoff = FAULT_BACKOFF_MAX

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def name(self) -> str:
        return self.collector.NAME

    async def tick(self) -> bool:
        """
        Run one acquisition and write its objects.

        Returns:
            True if anything was written
        """
        try:
            self._state = RefreshState.QUERYING
            objects = await self.collector.acquire()

            if not objects:
                logger.info(f"Collector {self.name} returned nothing; keeping previous metrics")
                if self.telemetry:
                    self.telemetry.record_error(self.name)
                return False

            self._state = RefreshState.WRITING
            for obj in objects:
                self.store.update(self.collector.identity(obj), obj)

            if self.telemetry:
                self.telemetry.record_resources(self.name, len(objects))
            return True
        finally:
            self._state = RefreshState.IDLE

    async def _sleep(self, shutdown: asyncio.Event, seconds: float) -> None:
        """Wait for seconds or until shutdown, whichever comes first."""
        try:
            await asyncio.wait_for(shutdown.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    async def run(self, shutdown: asyncio.Event) -> None:
        """
        Refresh until shutdown is set.

        A fault inside one cycle is logged and followed by an increasing
        pause (capped) before the next attempt; the loop itself never exits
        because of it.
        """
        logger.info(f"Starting refresh of {self.name} (interval: {self.interval}s)")

        while not shutdown.is_set():
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception(f"Error in collector {self.name}; retrying in {self._backoff}s")
                if self.telemetry:
                    self.telemetry.record_error(self.name)
                await self._sleep(shutdown, self._backoff)
                self._backoff = min(self._backoff * 2, self._max_backoff)
                continue

            self._backoff = FAULT_BACKOFF_INITIAL
            await self._sleep(shutdown, self.interval)

        logger.info(f"Stopped refresh of {self.name}")
