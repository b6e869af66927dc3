"""Land totals for a dominion."""

from dominion.models import BUILDING_TYPES, LAND_TYPES, Dominion


class LandCalculator:
    """Sums the land and building columns of a dominion."""

    def get_total_land(self, dominion: Dominion) -> int:
        return sum(getattr(dominion, f"land_{land_type}") for land_type in LAND_TYPES)

    def get_total_buildings(self, dominion: Dominion) -> int:
        return sum(getattr(dominion, f"building_{building}") for building in BUILDING_TYPES)

    def get_total_barren_land(self, dominion: Dominion) -> int:
        """Acres without a building on them."""
        return max(0, self.get_total_land(dominion) - self.get_total_buildings(dominion))
