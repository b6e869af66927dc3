"""Active spell lookups with a per-instance cache."""

from sqlalchemy.orm import object_session

from dominion.models import ActiveSpell, Dominion


class SpellCalculator:
    """Reads a dominion's active spells through its ``active_spells`` relationship.

    Results are cached per dominion id. ``force_refresh`` expires the
    relationship on the dominion and reloads it, so spells added or removed
    earlier in the same transaction are observed.
    """

    def __init__(self) -> None:
        self._cache: dict[int, list[ActiveSpell]] = {}

    def get_active_spells(
        self, dominion: Dominion, force_refresh: bool = False
    ) -> list[ActiveSpell]:
        if force_refresh or dominion.id not in self._cache:
            session = object_session(dominion)
            if force_refresh and session is not None:
                session.expire(dominion, ["active_spells"])
            self._cache[dominion.id] = [
                spell for spell in dominion.active_spells if spell.duration > 0
            ]
        return self._cache[dominion.id]

    def is_spell_active(self, dominion: Dominion, spell: str) -> bool:
        return any(active.spell == spell for active in self.get_active_spells(dominion))
