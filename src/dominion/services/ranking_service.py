"""Daily Ranking Service.

Rankings are refreshed in two passes per round:

Pass 1 (snapshot): land and networth of every dominion are written into its
``daily_rankings`` row, inserting the row on first sight. Ranks are not
touched here, so the previous day's ranks survive into pass 2.

Pass 2 (rank): for each metric the round's rows are re-read from storage in
rank order and numbered 1..N. Ties on the metric keep previously ranked
dominions in their previous order ahead of newcomers, and newcomers in
creation order. The change is the previous rank minus the new one, or 0 for a
dominion ranked for the first time.
"""

import logging
from collections.abc import Iterator, Sequence
from datetime import datetime
from typing import Literal

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from dominion.interfaces import ILandCalculator, INetworthCalculator
from dominion.models import DailyRanking, Dominion, Round, utc_now

logger = logging.getLogger(__name__)

RankingMetric = Literal["land", "networth"]
RANKING_METRICS: tuple[RankingMetric, ...] = ("land", "networth")

DEFAULT_CHUNK_SIZE = 50


def _chunks(ids: Sequence[int], size: int) -> Iterator[Sequence[int]]:
    for start in range(0, len(ids), size):
        yield ids[start : start + size]


class RankingService:
    """Maintains the per-round daily ranking snapshots."""

    def __init__(
        self,
        session: Session,
        land: ILandCalculator,
        networth: INetworthCalculator,
        *,
        now: datetime | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.session = session
        self.land = land
        self.networth = networth
        self.now = now or utc_now()
        self.chunk_size = chunk_size

    def update_snapshots(self, round_id: int, dominion_ids: Sequence[int]) -> int:
        """Pass 1: upsert land, networth and display metadata.

        Returns:
            Number of snapshots inserted (the rest were updated)
        """
        inserted = 0
        for chunk in _chunks(sorted(dominion_ids), self.chunk_size):
            dominions = (
                self.session.execute(
                    select(Dominion)
                    .where(Dominion.id.in_(chunk), Dominion.round_id == round_id)
                    .options(selectinload(Dominion.race), selectinload(Dominion.realm))
                    .order_by(Dominion.id)
                )
                .scalars()
                .all()
            )
            for dominion in dominions:
                if self._upsert_snapshot(dominion):
                    inserted += 1

        self.session.flush()
        logger.debug(
            "Round %d: %d ranking snapshots refreshed, %d new",
            round_id,
            len(dominion_ids),
            inserted,
        )
        return inserted

    def _upsert_snapshot(self, dominion: Dominion) -> bool:
        data = {
            "dominion_name": dominion.name,
            "race_name": dominion.race.name,
            "realm_number": dominion.realm.number,
            "realm_name": dominion.realm.name,
            "land": self.land.get_total_land(dominion),
            "networth": self.networth.get_dominion_networth(dominion),
        }

        ranking = self.session.execute(
            select(DailyRanking).where(
                DailyRanking.round_id == dominion.round_id,
                DailyRanking.dominion_id == dominion.id,
            )
        ).scalar_one_or_none()

        if ranking is None:
            self.session.add(
                DailyRanking(
                    round_id=dominion.round_id,
                    dominion_id=dominion.id,
                    created_at=dominion.created_at,
                    updated_at=self.now,
                    **data,
                )
            )
            return True

        for key, value in data.items():
            setattr(ranking, key, value)
        ranking.updated_at = self.now
        return False

    def update_ranks(self, round_id: int) -> None:
        """Pass 2: recompute ranks and rank changes for every metric."""
        for metric in RANKING_METRICS:
            self._rank_metric(round_id, metric)

    def update_active_round_ranks(self) -> list[int]:
        """Run pass 2 for every round active at ``now``.

        Returns:
            IDs of the rounds that were ranked
        """
        round_ids = (
            self.session.execute(
                select(Round.id).where(Round.active_clause(self.now)).order_by(Round.id)
            )
            .scalars()
            .all()
        )
        for round_id in round_ids:
            self.update_ranks(round_id)
        return list(round_ids)

    def get_ordered_rankings(self, round_id: int, metric: RankingMetric) -> list[DailyRanking]:
        """Read the round's snapshots from storage in ranking order for ``metric``."""
        value = getattr(DailyRanking, metric)
        previous_rank = getattr(DailyRanking, f"{metric}_rank")
        return list(
            self.session.execute(
                select(DailyRanking)
                .where(DailyRanking.round_id == round_id)
                .order_by(
                    value.desc(),
                    previous_rank.is_(None),
                    previous_rank.asc(),
                    DailyRanking.created_at.asc(),
                    DailyRanking.id.asc(),
                )
                .execution_options(populate_existing=True)
            )
            .scalars()
            .all()
        )

    def _rank_metric(self, round_id: int, metric: RankingMetric) -> None:
        rank_attr = f"{metric}_rank"
        change_attr = f"{metric}_rank_change"

        for rank, ranking in enumerate(self.get_ordered_rankings(round_id, metric), start=1):
            previous = getattr(ranking, rank_attr)
            setattr(ranking, rank_attr, rank)
            setattr(ranking, change_attr, previous - rank if previous is not None else 0)

        self.session.flush()
