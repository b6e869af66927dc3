"""Runtime primitives backing the Dominion HTTP API."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from dominion.config import Settings, get_settings
from dominion.database import create_db_engine, create_session_factory
from dominion.schedule import CycleResult, run_daily_cycle, run_hourly_cycle

logger = logging.getLogger(__name__)


class TickScheduler:
    """Background scheduler running the hourly cycle and, periodically, the daily one.

    Cycles run in a worker thread and are serialised by a lock, so a new
    cycle never starts before the previous one has committed or rolled back.
    """

    MIN_INTERVAL_SECONDS = 0.1

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        interval_seconds: float,
        daily_tick_hours: int = 24,
    ) -> None:
        self._session_factory = session_factory
        self._interval = max(interval_seconds, self.MIN_INTERVAL_SECONDS)
        self._daily_tick_hours = max(daily_tick_hours, 1)
        self._hours_since_daily = 0
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._cycle_lock = asyncio.Lock()
        self.last_result: CycleResult | None = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def daily_tick_hours(self) -> int:
        return self._daily_tick_hours

    @property
    def hours_until_daily(self) -> int:
        return self._daily_tick_hours - self._hours_since_daily

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.running:
            self._stop_event = asyncio.Event()
            loop = asyncio.get_running_loop()
            self._task = loop.create_task(self._run_loop(), name="dominion-tick-loop")

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        self._stop_event.set()
        await task
        self._task = None

    async def run_hourly_now(self) -> CycleResult:
        async with self._cycle_lock:
            return await self._hourly()

    async def run_daily_now(self) -> CycleResult:
        async with self._cycle_lock:
            return await self._daily()

    async def _hourly(self) -> CycleResult:
        result = await asyncio.to_thread(run_hourly_cycle, self._session_factory)
        self.last_result = result
        return result

    async def _daily(self) -> CycleResult:
        result = await asyncio.to_thread(run_daily_cycle, self._session_factory)
        self.last_result = result
        return result

    async def _run_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                    break
                except TimeoutError:
                    pass
                await self._run_cycle()
        finally:
            self._task = None

    async def _run_cycle(self) -> None:
        async with self._cycle_lock:
            try:
                await self._hourly()
                self._hours_since_daily += 1
                if self._hours_since_daily >= self._daily_tick_hours:
                    await self._daily()
                    self._hours_since_daily = 0
            except Exception:
                # The cycle rolled back; the next interval retries from committed state
                logger.warning("scheduled tick failed; retrying next interval", exc_info=True)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.engine: Engine = create_db_engine(self.settings)
        self.session_factory = create_session_factory(self.engine)
        self.scheduler = TickScheduler(
            self.session_factory,
            interval_seconds=self.settings.tick_interval_seconds,
            daily_tick_hours=self.settings.daily_tick_hours,
        )

    async def startup(self) -> None:
        if self.settings.scheduler_enabled:
            self.scheduler.start()

    async def shutdown(self) -> None:
        await self.scheduler.stop()
        self.engine.dispose()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
