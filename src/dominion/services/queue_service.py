"""Countdown queue draining for the hourly tick.

Every queue table is unique on (dominion, item type, countdown), so a plain
``countdown = countdown - 1`` can collide mid-statement with the row one hour
ahead of it. Instead each drain runs three statements scoped to one dominion:

1. ``countdown = -(countdown - 1)`` for every positive countdown. Positive
   values map to distinct non-positive values, none of which is stored yet.
2. ``countdown = -countdown`` for every negative countdown, restoring the
   sign. No positive values are left after step 1, so nothing collides.
3. Read every row whose countdown is now zero, then delete it by its full
   (dominion, item type, 0) key.

This works on any backend without deferred constraints or ordered updates.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from dominion.models import (
    ActiveSpell,
    ConstructionQueue,
    Dominion,
    ExplorationQueue,
    TrainingQueue,
    utc_now,
)

QueueModel = (
    type[ExplorationQueue] | type[ConstructionQueue] | type[TrainingQueue] | type[ActiveSpell]
)


@dataclass(frozen=True, slots=True)
class FinishedItem:
    """A queue row whose countdown reached zero, copied before deletion."""

    item: str
    amount: int


def sum_finished(rows: Iterable[FinishedItem]) -> dict[str, int]:
    """Total finished amount per item type.

    Amounts of rows sharing an item type are added together, never replaced.
    """
    finished: dict[str, int] = {}
    for row in rows:
        finished[row.item] = finished.get(row.item, 0) + row.amount
    return finished


class QueueService:
    """Drains the countdown queues of single dominions."""

    def __init__(self, session: Session, now: datetime | None = None):
        self.session = session
        self.now = now or utc_now()

    def tick_exploration_queue(self, dominion: Dominion) -> dict[str, int]:
        """Advance exploration by one hour and return arrived acres per land type."""
        return sum_finished(self.drain(ExplorationQueue, dominion.id))

    def tick_construction_queue(self, dominion: Dominion) -> dict[str, int]:
        """Advance construction by one hour and return completed buildings per type."""
        return sum_finished(self.drain(ConstructionQueue, dominion.id))

    def tick_training_queue(self, dominion: Dominion) -> dict[str, int]:
        """Advance training by one hour and return trained units per unit type."""
        return sum_finished(self.drain(TrainingQueue, dominion.id))

    def tick_active_spells(self, dominion: Dominion) -> None:
        """Advance spell durations by one hour; expired spells simply disappear."""
        self.drain(ActiveSpell, dominion.id)

    def drain(self, model: QueueModel, dominion_id: int) -> list[FinishedItem]:
        """Run the three-step drain and return what finished this hour."""
        self._negate_decremented(model, dominion_id)
        self._restore_sign(model, dominion_id)
        return self._harvest(model, dominion_id)

    def _negate_decremented(self, model: QueueModel, dominion_id: int) -> None:
        countdown = getattr(model, model.countdown_column)
        self.session.execute(
            update(model)
            .where(model.dominion_id == dominion_id, countdown > 0)
            .values({countdown: -(countdown - 1)})
            .execution_options(synchronize_session="fetch")
        )

    def _restore_sign(self, model: QueueModel, dominion_id: int) -> None:
        countdown = getattr(model, model.countdown_column)
        self.session.execute(
            update(model)
            .where(model.dominion_id == dominion_id, countdown < 0)
            .values({countdown: -countdown, model.updated_at: self.now})
            .execution_options(synchronize_session="fetch")
        )

    def _harvest(self, model: QueueModel, dominion_id: int) -> list[FinishedItem]:
        countdown = getattr(model, model.countdown_column)
        item = getattr(model, model.item_column)

        rows = (
            self.session.execute(
                select(model)
                .where(model.dominion_id == dominion_id, countdown == 0)
                .order_by(model.id)
            )
            .scalars()
            .all()
        )
        finished = [
            FinishedItem(item=getattr(row, model.item_column), amount=getattr(row, "amount", 0))
            for row in rows
        ]

        for row in finished:
            self.session.execute(
                delete(model)
                .where(model.dominion_id == dominion_id, item == row.item, countdown == 0)
                .execution_options(synchronize_session="fetch")
            )

        return finished
