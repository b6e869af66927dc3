"""Daily ranking snapshot model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utc_now


class DailyRanking(Base):
    """Cached land and networth standing of one dominion in one round.

    Rows are upserted by the daily tick and never deleted. ``created_at``
    carries the dominion's own creation time, not the row's, and is the
    tie-break for dominions that have never been ranked.

    Attributes:
        id: Primary key
        round_id: Round of the snapshot
        dominion_id: Ranked dominion
        dominion_name, race_name, realm_number, realm_name: Display metadata
        land: Total land at the last snapshot
        land_rank: Land rank from the last rank pass (NULL until first pass)
        land_rank_change: Previous land rank minus current land rank
        networth: Networth at the last snapshot
        networth_rank: Networth rank from the last rank pass
        networth_rank_change: Previous networth rank minus current rank
    """

    __tablename__ = "daily_rankings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    round_id: Mapped[int] = mapped_column(Integer, ForeignKey("rounds.id"), nullable=False)
    dominion_id: Mapped[int] = mapped_column(Integer, ForeignKey("dominions.id"), nullable=False)

    # Display metadata
    dominion_name: Mapped[str] = mapped_column(String, nullable=False)
    race_name: Mapped[str] = mapped_column(String, nullable=False)
    realm_number: Mapped[int] = mapped_column(Integer, nullable=False)
    realm_name: Mapped[str] = mapped_column(String, nullable=False)

    # Land
    land: Mapped[int] = mapped_column(Integer, nullable=False)
    land_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    land_rank_change: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Networth
    networth: Mapped[int] = mapped_column(Integer, nullable=False)
    networth_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    networth_rank_change: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    __table_args__ = (
        UniqueConstraint("round_id", "dominion_id", name="uq_daily_rankings_round_dominion"),
        Index("idx_daily_rankings_round_land", "round_id", "land"),
        Index("idx_daily_rankings_round_networth", "round_id", "networth"),
    )

    def __repr__(self) -> str:
        return (
            f"<DailyRanking(round_id={self.round_id}, dominion_id={self.dominion_id}, "
            f"land_rank={self.land_rank}, networth_rank={self.networth_rank})>"
        )
