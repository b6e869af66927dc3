"""Service Factory for the Dominion engine.

This module provides factory functions for creating service instances with
proper dependency wiring. Use these functions in production code to ensure
all service dependencies are correctly initialized.

For testing, pass a :class:`Calculators` bundle of protocol-based fakes.

Example:
    # Production usage
    from dominion.factory import create_tick_service
    tick = create_tick_service(session)

    # Testing usage
    calculators = Calculators(production=FakeProduction(), ...)
    tick = create_tick_service(session, calculators)
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from dominion.calculators import (
    CasualtiesCalculator,
    LandCalculator,
    NetworthCalculator,
    PopulationCalculator,
    ProductionCalculator,
    SpellCalculator,
)
from dominion.config import get_settings
from dominion.interfaces import (
    ICasualtiesCalculator,
    ILandCalculator,
    INetworthCalculator,
    IPopulationCalculator,
    IProductionCalculator,
    ISpellCalculator,
)
from dominion.models import utc_now
from dominion.services.history_service import HistoryService
from dominion.services.queue_service import QueueService
from dominion.services.ranking_service import RankingService
from dominion.services.tick_service import TickService


@dataclass
class Calculators:
    """The calculator collaborators consulted by one tick cycle."""

    land: ILandCalculator
    networth: INetworthCalculator
    production: IProductionCalculator
    population: IPopulationCalculator
    casualties: ICasualtiesCalculator
    spells: ISpellCalculator


def create_calculators() -> Calculators:
    """Create the default calculators, sharing one spell cache.

    Returns:
        Calculators bundle, meant to live for a single cycle
    """
    land = LandCalculator()
    spells = SpellCalculator()
    population = PopulationCalculator(land, spells)
    return Calculators(
        land=land,
        networth=NetworthCalculator(land),
        production=ProductionCalculator(population, spells),
        population=population,
        casualties=CasualtiesCalculator(),
        spells=spells,
    )


def create_ranking_service(
    session: Session,
    calculators: Calculators | None = None,
    *,
    now: datetime | None = None,
    chunk_size: int | None = None,
) -> RankingService:
    """Create a RankingService.

    Args:
        session: Database session
        calculators: Calculator bundle (defaults to :func:`create_calculators`)
        now: Cycle timestamp
        chunk_size: Dominions per snapshot batch (defaults to settings)

    Returns:
        Fully initialized RankingService
    """
    calculators = calculators or create_calculators()
    return RankingService(
        session,
        calculators.land,
        calculators.networth,
        now=now,
        chunk_size=chunk_size or get_settings().ranking_chunk_size,
    )


def create_tick_service(
    session: Session,
    calculators: Calculators | None = None,
    *,
    now: datetime | None = None,
    chunk_size: int | None = None,
) -> TickService:
    """Create a TickService with all dependencies sharing one timestamp.

    Args:
        session: Database session
        calculators: Calculator bundle (defaults to :func:`create_calculators`)
        now: Cycle timestamp (defaults to the current UTC time)
        chunk_size: Dominions per ranking snapshot batch

    Returns:
        Fully initialized TickService
    """
    calculators = calculators or create_calculators()
    now = now or utc_now()
    return TickService(
        session,
        queues=QueueService(session, now),
        history=HistoryService(session),
        rankings=create_ranking_service(session, calculators, now=now, chunk_size=chunk_size),
        production=calculators.production,
        population=calculators.population,
        casualties=calculators.casualties,
        spells=calculators.spells,
        now=now,
    )
