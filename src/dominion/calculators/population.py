"""Population capacity, growth and employment.

Housing:
    every acre houses 5, every building 15, and homes another 15 on top.
Growth:
    peasants grow 3% per hour (4.5% under Harmony) up to the free housing.
Drafting:
    1% of peasants per hour become draftees while the military makes up
    less than ``DRAFT_RATE`` of the total population.
"""

from dominion.calculators.land import LandCalculator
from dominion.calculators.spell import SpellCalculator
from dominion.models import UNIT_TYPES, Dominion

HOUSING_PER_ACRE = 5
HOUSING_PER_BUILDING = 15
HOUSING_PER_HOME = 15
JOBS_PER_BUILDING = 20
PEASANT_BIRTH_RATE = 0.03
HARMONY_BIRTH_MULTIPLIER = 1.5
DRAFTEE_GROWTH_RATE = 0.01
DRAFT_RATE = 0.10


class PopulationCalculator:
    def __init__(self, land: LandCalculator, spells: SpellCalculator):
        self.land = land
        self.spells = spells

    def get_max_population(self, dominion: Dominion) -> int:
        return (
            self.land.get_total_land(dominion) * HOUSING_PER_ACRE
            + self.land.get_total_buildings(dominion) * HOUSING_PER_BUILDING
            + dominion.building_home * HOUSING_PER_HOME
        )

    def get_population_military(self, dominion: Dominion) -> int:
        return sum(getattr(dominion, f"military_{unit}") for unit in UNIT_TYPES)

    def get_population(self, dominion: Dominion) -> int:
        return dominion.peasants + self.get_population_military(dominion)

    def get_employment_jobs(self, dominion: Dominion) -> int:
        """Homes and barracks provide no jobs."""
        buildings = self.land.get_total_buildings(dominion)
        buildings -= dominion.building_home + dominion.building_barracks
        return max(0, buildings) * JOBS_PER_BUILDING

    def get_population_employed(self, dominion: Dominion) -> int:
        return min(dominion.peasants, self.get_employment_jobs(dominion))

    def get_population_draftee_growth(self, dominion: Dominion) -> int:
        population = self.get_population(dominion)
        if population == 0:
            return 0
        if self.get_population_military(dominion) / population >= DRAFT_RATE:
            return 0
        return int(dominion.peasants * DRAFTEE_GROWTH_RATE)

    def get_population_peasant_growth(self, dominion: Dominion) -> int:
        birth_rate = PEASANT_BIRTH_RATE
        if self.spells.is_spell_active(dominion, "harmony"):
            birth_rate *= HARMONY_BIRTH_MULTIPLIER
        births = int(dominion.peasants * birth_rate)

        room = (
            self.get_max_population(dominion)
            - self.get_population(dominion)
            - self.get_population_draftee_growth(dominion)
        )
        return max(0, min(births, room))
