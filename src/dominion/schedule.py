"""Scheduled tick cycles.

``run_hourly_cycle`` and ``run_daily_cycle`` are the two entry points of the
engine. Each runs as one transaction spanning every active round: either
every dominion advances or, on any error, nothing is committed and the cycle
can simply be run again.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlalchemy.orm import Session, sessionmaker

from dominion.database import get_session_factory
from dominion.factory import Calculators, create_tick_service
from dominion.models import utc_now
from dominion.services.tick_service import TickResult, TickService

logger = logging.getLogger(__name__)

CycleKind = Literal["hourly", "daily"]


@dataclass(frozen=True)
class CycleResult:
    """Summary of one committed cycle."""

    kind: CycleKind
    rounds: list[int]
    dominions: int
    started_at: datetime
    duration_seconds: float


def run_hourly_cycle(
    session_factory: sessionmaker[Session] | None = None,
    *,
    now: datetime | None = None,
    calculators: Calculators | None = None,
) -> CycleResult:
    """Tick every dominion of every active round, in one transaction."""
    return _run_cycle("hourly", TickService.tick_hourly, session_factory, now, calculators)


def run_daily_cycle(
    session_factory: sessionmaker[Session] | None = None,
    *,
    now: datetime | None = None,
    calculators: Calculators | None = None,
) -> CycleResult:
    """Reset daily flags and refresh rankings of every active round, in one transaction."""
    return _run_cycle("daily", TickService.tick_daily, session_factory, now, calculators)


def _run_cycle(
    kind: CycleKind,
    step: Callable[[TickService], TickResult],
    session_factory: sessionmaker[Session] | None,
    now: datetime | None,
    calculators: Calculators | None,
) -> CycleResult:
    factory = session_factory or get_session_factory()
    now = now or utc_now()
    started = time.perf_counter()
    logger.debug("%s tick started", kind.capitalize())

    try:
        with factory.begin() as session:
            result = step(create_tick_service(session, calculators, now=now))
    except Exception:
        logger.exception("%s tick aborted, all changes rolled back", kind.capitalize())
        raise

    duration = time.perf_counter() - started
    if kind == "hourly":
        logger.info("Ticked %d dominions in %.2f seconds", result.dominions, duration)
    else:
        logger.info(
            "Daily tick finished: %d dominions in %d rounds ranked in %.2f seconds",
            result.dominions,
            len(result.rounds),
            duration,
        )

    return CycleResult(
        kind=kind,
        rounds=result.rounds,
        dominions=result.dominions,
        started_at=now,
        duration_seconds=duration,
    )
