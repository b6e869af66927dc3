"""Countdown queue models.

This module contains the per-dominion countdown tables drained by the
hourly tick:
- Exploration queue (incoming acres per land type)
- Construction queue (buildings under construction)
- Training queue (units in training)
- Active spells (timed effects, drained by duration)

Every table is unique on (dominion, item type, countdown). Each model names
its item-type column in ``item_column`` and its countdown column in
``countdown_column`` so the drain can be written once for all of them.
"""

from typing import ClassVar

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from .dominion import BUILDING_TYPES, LAND_TYPES, UNIT_TYPES


def _in_clause(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


class ExplorationQueue(Base, TimestampMixin):
    """Acres being explored, arriving when ``hours`` reaches zero.

    Attributes:
        id: Primary key
        dominion_id: Owning dominion
        land_type: Land type the acres will be added to
        amount: Number of acres
        hours: Hours remaining until arrival
    """

    __tablename__ = "queue_exploration"

    item_column: ClassVar[str] = "land_type"
    countdown_column: ClassVar[str] = "hours"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    dominion_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dominions.id", ondelete="CASCADE"), nullable=False
    )
    land_type: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    hours: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("dominion_id", "land_type", "hours", name="uq_queue_exploration"),
        CheckConstraint(_in_clause("land_type", LAND_TYPES), name="ck_queue_exploration_type"),
        Index("idx_queue_exploration_dominion", "dominion_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ExplorationQueue(dominion_id={self.dominion_id}, land_type='{self.land_type}', "
            f"amount={self.amount}, hours={self.hours})>"
        )


class ConstructionQueue(Base, TimestampMixin):
    """Buildings under construction, completed when ``hours`` reaches zero."""

    __tablename__ = "queue_construction"

    item_column: ClassVar[str] = "building"
    countdown_column: ClassVar[str] = "hours"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    dominion_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dominions.id", ondelete="CASCADE"), nullable=False
    )
    building: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    hours: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("dominion_id", "building", "hours", name="uq_queue_construction"),
        CheckConstraint(
            _in_clause("building", BUILDING_TYPES), name="ck_queue_construction_type"
        ),
        Index("idx_queue_construction_dominion", "dominion_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ConstructionQueue(dominion_id={self.dominion_id}, building='{self.building}', "
            f"amount={self.amount}, hours={self.hours})>"
        )


class TrainingQueue(Base, TimestampMixin):
    """Units in training, joining the military when ``hours`` reaches zero."""

    __tablename__ = "queue_training"

    item_column: ClassVar[str] = "unit_type"
    countdown_column: ClassVar[str] = "hours"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    dominion_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dominions.id", ondelete="CASCADE"), nullable=False
    )
    unit_type: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    hours: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("dominion_id", "unit_type", "hours", name="uq_queue_training"),
        CheckConstraint(_in_clause("unit_type", UNIT_TYPES), name="ck_queue_training_type"),
        Index("idx_queue_training_dominion", "dominion_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<TrainingQueue(dominion_id={self.dominion_id}, unit_type='{self.unit_type}', "
            f"amount={self.amount}, hours={self.hours})>"
        )


class ActiveSpell(Base, TimestampMixin):
    """A spell currently affecting a dominion.

    The row existing is what makes the spell active; it is removed when
    ``duration`` reaches zero.

    Attributes:
        id: Primary key
        dominion_id: Affected dominion
        spell: Spell key
        duration: Hours the spell stays active
        cast_by_dominion_id: Caster, when cast by another dominion
    """

    __tablename__ = "active_spells"

    item_column: ClassVar[str] = "spell"
    countdown_column: ClassVar[str] = "duration"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    dominion_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dominions.id", ondelete="CASCADE"), nullable=False
    )
    spell: Mapped[str] = mapped_column(String, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    cast_by_dominion_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("dominions.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("dominion_id", "spell", "duration", name="uq_active_spells"),
        Index("idx_active_spells_dominion", "dominion_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ActiveSpell(dominion_id={self.dominion_id}, spell='{self.spell}', "
            f"duration={self.duration})>"
        )


QUEUE_MODELS = (ExplorationQueue, ConstructionQueue, TrainingQueue, ActiveSpell)
