"""Service layer for the Dominion tick engine.

Services depend on the calculator Protocols in :mod:`dominion.interfaces`
and operate inside a session owned by the caller:

- QueueService: two-phase countdown drain of the queue tables
- HistoryService: dominion saves tagged with an event marker
- RankingService: daily ranking snapshots and rank recomputation
- TickService: hourly per-dominion tick and daily flag reset

Production Usage:
    from dominion.factory import create_tick_service
    tick = create_tick_service(session)
    tick.tick_hourly()

Testing Usage:
    from dominion.services.tick_service import TickService

    class FakeProduction:
        def get_platinum_production(self, dominion):
            return 0
        ...

    tick = TickService(session, production=FakeProduction(), ...)
"""

from dominion.services.history_service import EVENT_TICK, HistoryService
from dominion.services.queue_service import FinishedItem, QueueService, sum_finished
from dominion.services.ranking_service import RANKING_METRICS, RankingService
from dominion.services.tick_service import TickResult, TickService

__all__ = [
    "EVENT_TICK",
    "RANKING_METRICS",
    "FinishedItem",
    "HistoryService",
    "QueueService",
    "RankingService",
    "TickResult",
    "TickService",
    "sum_finished",
]
