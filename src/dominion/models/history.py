"""Dominion history model.

History rows are the audit trail of dominion saves that carry an event
marker, such as the hourly tick.
"""

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampCreatedMixin

if TYPE_CHECKING:
    from .dominion import Dominion


class DominionHistory(Base, TimestampCreatedMixin):
    """Records the attribute changes of one tagged dominion save.

    Attributes:
        id: Primary key
        dominion_id: Dominion that was saved
        event: Event marker the save was tagged with
        delta: JSON object of attribute name to change (new minus old for
            numbers, the new value for booleans)
    """

    __tablename__ = "dominion_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    dominion_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dominions.id", ondelete="CASCADE"), nullable=False
    )
    event: Mapped[str] = mapped_column(String, nullable=False)
    delta: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    dominion: Mapped["Dominion"] = relationship("Dominion", back_populates="history")

    __table_args__ = (
        CheckConstraint("event IN ('tick')", name="ck_dominion_history_event"),
        Index("idx_dominion_history_dominion", "dominion_id"),
    )

    def __repr__(self) -> str:
        return f"<DominionHistory(id={self.id}, dominion_id={self.dominion_id}, event='{self.event}')>"
