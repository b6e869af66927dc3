"""Time & Tick Service for the Dominion engine.

This service advances dominions by one hour, and runs the daily
housekeeping that precedes the ranking refresh:
- Draining exploration, construction and training queues
- Resource production, starvation and population growth
- Morale, spy strength and wizard strength regeneration
- Expiring active spells
- Resetting daily bonus flags and refreshing daily rankings

The service works inside the caller's transaction and never commits; see
:mod:`dominion.schedule` for the transaction boundaries.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from dominion.interfaces import (
    ICasualtiesCalculator,
    IPopulationCalculator,
    IProductionCalculator,
    ISpellCalculator,
)
from dominion.models import Dominion, Round, utc_now
from dominion.services.history_service import EVENT_TICK, HistoryService
from dominion.services.queue_service import QueueService
from dominion.services.ranking_service import RankingService

logger = logging.getLogger(__name__)

# Morale regeneration
MORALE_LOW_THRESHOLD = 70
MORALE_LOW_REGEN = 6
MORALE_REGEN = 3
MAX_MORALE = 100

# Spy and wizard strength regeneration
STRENGTH_REGEN = 4
MAX_STRENGTH = 100

# Stockpiles that production may not drive below zero
FLOORED_RESOURCES = ("platinum", "lumber", "mana", "ore", "gems", "boats")


@dataclass
class TickResult:
    """Counts produced by one pass over the active rounds."""

    rounds: list[int] = field(default_factory=list)
    dominions: int = 0


class TickService:
    """Advances dominions of active rounds within one session."""

    def __init__(
        self,
        session: Session,
        *,
        queues: QueueService,
        history: HistoryService,
        rankings: RankingService,
        production: IProductionCalculator,
        population: IPopulationCalculator,
        casualties: ICasualtiesCalculator,
        spells: ISpellCalculator,
        now: datetime | None = None,
    ):
        self.session = session
        self.queues = queues
        self.history = history
        self.rankings = rankings
        self.production = production
        self.population = population
        self.casualties = casualties
        self.spells = spells
        self.now = now or utc_now()

    def get_active_rounds(self) -> list[Round]:
        """Rounds whose window contains ``now``, ordered by id."""
        return list(
            self.session.execute(
                select(Round).where(Round.active_clause(self.now)).order_by(Round.id)
            )
            .scalars()
            .all()
        )

    def tick_hourly(self) -> TickResult:
        """Tick every dominion of every active round once."""
        result = TickResult()
        for round_ in self.get_active_rounds():
            result.rounds.append(round_.id)
            for dominion in round_.dominions:
                self.tick_dominion(dominion)
                result.dominions += 1
        return result

    def tick_daily(self) -> TickResult:
        """Reset daily flags, then refresh rankings of every active round."""
        result = TickResult()
        for round_ in self.get_active_rounds():
            result.rounds.append(round_.id)
            dominion_ids = []
            for dominion in round_.dominions:
                dominion.daily_platinum = False
                dominion.daily_land = False
                self.history.save(dominion)
                dominion_ids.append(dominion.id)
            result.dominions += len(dominion_ids)

            # Snapshots read the flushed dominion rows
            self.session.flush()
            self.rankings.update_snapshots(round_.id, dominion_ids)

        self.rankings.update_active_round_ranks()
        return result

    def tick_dominion(self, dominion: Dominion) -> None:
        """Advance one dominion by one hour.

        The steps run in a fixed order; production reads the land and
        buildings that arrived this hour, and population growth reads the
        post-starvation military.
        """
        self._apply_queues(dominion)

        # Spells that expired last hour must not affect this hour's production
        self.spells.get_active_spells(dominion, force_refresh=True)

        self._apply_production(dominion)
        self._apply_starvation(dominion)
        self._apply_population_growth(dominion)
        self._regenerate(dominion)

        self.queues.tick_active_spells(dominion)

        self.history.save(dominion, event=EVENT_TICK)

    def _apply_queues(self, dominion: Dominion) -> None:
        for land_type, amount in self.queues.tick_exploration_queue(dominion).items():
            _increment(dominion, Dominion.land_attribute(land_type), amount)

        for building, amount in self.queues.tick_construction_queue(dominion).items():
            _increment(dominion, Dominion.building_attribute(building), amount)

        for unit_type, amount in self.queues.tick_training_queue(dominion).items():
            _increment(dominion, Dominion.unit_attribute(unit_type), amount)

    def _apply_production(self, dominion: Dominion) -> None:
        production = self.production
        dominion.resource_platinum += production.get_platinum_production(dominion)
        dominion.resource_food += production.get_food_net_change(dominion)
        dominion.resource_lumber += production.get_lumber_net_change(dominion)
        dominion.resource_mana += production.get_mana_net_change(dominion)
        dominion.resource_ore += production.get_ore_production(dominion)
        dominion.resource_gems += production.get_gem_production(dominion)
        dominion.resource_boats += production.get_boat_production(dominion)

        # Food is clamped by starvation, after casualties are taken from the shortfall
        for resource in FLOORED_RESOURCES:
            attribute = f"resource_{resource}"
            setattr(dominion, attribute, max(0, getattr(dominion, attribute)))

    def _apply_starvation(self, dominion: Dominion) -> None:
        if dominion.resource_food >= 0:
            return

        casualties = self.casualties.get_starvation_casualties_by_unit_type(dominion)
        for attribute, amount in casualties.items():
            _increment(dominion, Dominion.population_attribute(attribute), -amount)

        logger.debug(
            "Dominion %d starving (food %d), casualties %s",
            dominion.id,
            dominion.resource_food,
            casualties,
        )
        dominion.resource_food = 0

    def _apply_population_growth(self, dominion: Dominion) -> None:
        peasant_growth = self.population.get_population_peasant_growth(dominion)
        dominion.peasants += peasant_growth
        dominion.peasants_last_hour = peasant_growth

        dominion.military_draftees += self.population.get_population_draftee_growth(dominion)

    def _regenerate(self, dominion: Dominion) -> None:
        if dominion.morale < MORALE_LOW_THRESHOLD:
            dominion.morale += MORALE_LOW_REGEN
        elif dominion.morale < MAX_MORALE:
            dominion.morale = min(dominion.morale + MORALE_REGEN, MAX_MORALE)

        if dominion.spy_strength < MAX_STRENGTH:
            dominion.spy_strength = min(dominion.spy_strength + STRENGTH_REGEN, MAX_STRENGTH)

        if dominion.wizard_strength < MAX_STRENGTH:
            dominion.wizard_strength = min(dominion.wizard_strength + STRENGTH_REGEN, MAX_STRENGTH)


def _increment(dominion: Dominion, attribute: str, amount: int) -> None:
    setattr(dominion, attribute, getattr(dominion, attribute) + amount)
