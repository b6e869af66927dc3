"""Calculator Protocol Interfaces.

This module defines the protocols for the calculators the tick engine
consults. Calculators are pure functions of dominion state; the spell
calculator additionally accepts a flag that bypasses its cache.
"""

from typing import Protocol

from dominion.models import ActiveSpell, Dominion


class IProductionCalculator(Protocol):
    """Protocol for hourly resource production.

    Every method returns a signed delta, net of consumption where the name
    says so, to add to the matching ``resource_*`` stockpile.
    """

    def get_platinum_production(self, dominion: Dominion) -> int: ...

    def get_food_net_change(self, dominion: Dominion) -> int: ...

    def get_lumber_net_change(self, dominion: Dominion) -> int: ...

    def get_mana_net_change(self, dominion: Dominion) -> int: ...

    def get_ore_production(self, dominion: Dominion) -> int: ...

    def get_gem_production(self, dominion: Dominion) -> int: ...

    def get_boat_production(self, dominion: Dominion) -> int: ...


class IPopulationCalculator(Protocol):
    """Protocol for hourly population growth."""

    def get_population_peasant_growth(self, dominion: Dominion) -> int:
        """Peasants gained this hour (never negative)."""
        ...

    def get_population_draftee_growth(self, dominion: Dominion) -> int:
        """Draftees gained this hour (never negative)."""
        ...


class ICasualtiesCalculator(Protocol):
    """Protocol for casualty calculations."""

    def get_starvation_casualties_by_unit_type(self, dominion: Dominion) -> dict[str, int]:
        """Casualties for a dominion whose food stockpile is negative.

        Args:
            dominion: Dominion with ``resource_food < 0``

        Returns:
            Mapping of population attribute name (``peasants``,
            ``military_unit1``, ...) to the number of casualties
        """
        ...


class ILandCalculator(Protocol):
    """Protocol for land totals."""

    def get_total_land(self, dominion: Dominion) -> int: ...

    def get_total_barren_land(self, dominion: Dominion) -> int: ...


class INetworthCalculator(Protocol):
    """Protocol for networth."""

    def get_dominion_networth(self, dominion: Dominion) -> int: ...


class ISpellCalculator(Protocol):
    """Protocol for active spell lookups."""

    def get_active_spells(
        self, dominion: Dominion, force_refresh: bool = False
    ) -> list[ActiveSpell]:
        """Return the dominion's active spells.

        Args:
            dominion: Dominion to inspect
            force_refresh: Reload from storage instead of using the cache
        """
        ...

    def is_spell_active(self, dominion: Dominion, spell: str) -> bool: ...
