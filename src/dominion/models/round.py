"""Round, realm and race models.

A round is one bounded game session. Realms group dominions inside a round,
and races are the catalogue of playable races. Realms and races only feed
display metadata into the daily rankings.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    ColumnElement,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    and_,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, as_utc

if TYPE_CHECKING:
    from .dominion import Dominion


class Round(Base, TimestampMixin):
    """Represents a single game round.

    A round is active while ``start_date <= now < end_date``. Only active
    rounds are ticked and ranked.

    Attributes:
        id: Primary key
        number: Sequential round number
        name: Display name
        start_date: When the round opens
        end_date: When the round closes (exclusive)
    """

    __tablename__ = "rounds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    realms: Mapped[list["Realm"]] = relationship(
        "Realm", back_populates="round", cascade="all, delete-orphan"
    )
    dominions: Mapped[list["Dominion"]] = relationship(
        "Dominion", back_populates="round", order_by="Dominion.id"
    )

    __table_args__ = (CheckConstraint("start_date < end_date", name="ck_rounds_window"),)

    @classmethod
    def active_clause(cls, now: datetime) -> ColumnElement[bool]:
        """SQL predicate selecting rounds whose window contains ``now``."""
        return and_(cls.start_date <= now, cls.end_date > now)

    def is_active(self, now: datetime) -> bool:
        return as_utc(self.start_date) <= as_utc(now) < as_utc(self.end_date)

    def __repr__(self) -> str:
        return f"<Round(id={self.id}, number={self.number}, name='{self.name}')>"


class Realm(Base, TimestampMixin):
    """A numbered group of dominions within a round."""

    __tablename__ = "realms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    round_id: Mapped[int] = mapped_column(Integer, ForeignKey("rounds.id"), nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    round: Mapped["Round"] = relationship("Round", back_populates="realms")
    dominions: Mapped[list["Dominion"]] = relationship("Dominion", back_populates="realm")

    __table_args__ = (
        UniqueConstraint("round_id", "number", name="uq_realms_round_number"),
        Index("idx_realms_round", "round_id"),
    )

    def __repr__(self) -> str:
        return f"<Realm(id={self.id}, number={self.number}, name='{self.name}')>"


class Race(Base):
    """Playable race catalogue entry."""

    __tablename__ = "races"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Race(id={self.id}, name='{self.name}')>"
