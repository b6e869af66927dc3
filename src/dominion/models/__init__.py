"""SQLAlchemy models for the Dominion tick engine.

This module exports all database models and the declarative base.
"""

from .base import Base, TimestampCreatedMixin, TimestampMixin, as_utc, utc_now

# Dominion models
from .dominion import BUILDING_TYPES, LAND_TYPES, RESOURCE_TYPES, UNIT_TYPES, Dominion

# History models
from .history import DominionHistory

# Queue models
from .queue import QUEUE_MODELS, ActiveSpell, ConstructionQueue, ExplorationQueue, TrainingQueue

# Ranking models
from .ranking import DailyRanking

# Round models
from .round import Race, Realm, Round

__all__ = [
    "BUILDING_TYPES",
    "LAND_TYPES",
    "QUEUE_MODELS",
    "RESOURCE_TYPES",
    "UNIT_TYPES",
    "ActiveSpell",
    "Base",
    "ConstructionQueue",
    "DailyRanking",
    "Dominion",
    "DominionHistory",
    "ExplorationQueue",
    "Race",
    "Realm",
    "Round",
    "TimestampCreatedMixin",
    "TimestampMixin",
    "TrainingQueue",
    "as_utc",
    "utc_now",
]
