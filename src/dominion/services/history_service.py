"""Dominion history recording.

Saving a dominion with an event marker records which attributes changed
since the dominion was loaded, as a :class:`DominionHistory` row.
"""

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from dominion.models import Dominion, DominionHistory

EVENT_TICK = "tick"

# Bookkeeping columns that never appear in a delta
_IGNORED_ATTRIBUTES = frozenset({"id", "round_id", "realm_id", "race_id", "created_at", "updated_at"})


class HistoryService:
    """Persists dominions and the audit trail of tagged saves."""

    def __init__(self, session: Session):
        self.session = session

    def save(self, dominion: Dominion, event: str | None = None) -> DominionHistory | None:
        """Add ``dominion`` to the session and record a history row for ``event``.

        The row holds pending changes only; it is written when the caller's
        transaction flushes.
        """
        history = None
        if event is not None:
            history = DominionHistory(
                dominion_id=dominion.id, event=event, delta=self.get_delta(dominion)
            )
            self.session.add(history)
        self.session.add(dominion)
        return history

    def get_delta(self, dominion: Dominion) -> dict[str, Any]:
        """Changes since load: numeric differences, or the new value for booleans."""
        state = inspect(dominion)
        delta: dict[str, Any] = {}
        for attr in state.mapper.column_attrs:
            if attr.key in _IGNORED_ATTRIBUTES:
                continue
            history = state.attrs[attr.key].history
            if not history.added:
                continue
            new = history.added[0]
            old = history.deleted[0] if history.deleted else None
            if isinstance(new, bool):
                delta[attr.key] = new
            elif isinstance(new, int) and isinstance(old, int):
                if new != old:
                    delta[attr.key] = new - old
            else:
                delta[attr.key] = new
        return delta
