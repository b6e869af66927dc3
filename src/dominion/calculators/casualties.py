"""Casualty calculations."""

from dominion.models import UNIT_TYPES, Dominion

STARVATION_CASUALTY_RATE = 0.01


class CasualtiesCalculator:
    def get_starvation_casualties_by_unit_type(self, dominion: Dominion) -> dict[str, int]:
        """One percent of peasants and of every unit type die of starvation."""
        casualties = {"peasants": int(dominion.peasants * STARVATION_CASUALTY_RATE)}
        for unit in UNIT_TYPES:
            attribute = f"military_{unit}"
            casualties[attribute] = int(getattr(dominion, attribute) * STARVATION_CASUALTY_RATE)
        return casualties
