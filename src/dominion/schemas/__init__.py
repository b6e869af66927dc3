from .ranking import RankingRead
from .round import RoundRead
from .tick import CycleResultRead, SchedulerStatus, SchedulerUpdate

__all__ = [
    "CycleResultRead",
    "RankingRead",
    "RoundRead",
    "SchedulerStatus",
    "SchedulerUpdate",
]
