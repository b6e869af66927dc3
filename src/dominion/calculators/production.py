"""Hourly resource production.

Each method returns the signed amount to add to a stockpile. Food, lumber
and mana are net figures: production minus consumption and decay.
"""

from dominion.calculators.population import PopulationCalculator
from dominion.calculators.spell import SpellCalculator
from dominion.models import Dominion

PLATINUM_PER_EMPLOYED_PEASANT = 2.7
PLATINUM_PER_ALCHEMY = 45
FOOD_PER_FARM = 80
FOOD_PER_DOCK = 35
FOOD_CONSUMPTION_PER_HEAD = 0.25
FOOD_DECAY = 0.01
LUMBER_PER_LUMBERYARD = 50
LUMBER_DECAY = 0.01
MANA_PER_TOWER = 25
MANA_DECAY = 0.02
ORE_PER_ORE_MINE = 60
GEMS_PER_DIAMOND_MINE = 15
DOCKS_PER_BOAT = 20

SPELL_BONUSES: dict[str, float] = {
    "midas_touch": 0.10,
    "gaias_watch": 0.10,
    "mining_strength": 0.10,
    "miners_sight": 0.05,
}


class ProductionCalculator:
    def __init__(self, population: PopulationCalculator, spells: SpellCalculator):
        self.population = population
        self.spells = spells

    def _multiplier(self, dominion: Dominion, spell: str) -> float:
        if self.spells.is_spell_active(dominion, spell):
            return 1 + SPELL_BONUSES[spell]
        return 1.0

    def get_platinum_production(self, dominion: Dominion) -> int:
        raw = self.population.get_population_employed(dominion) * PLATINUM_PER_EMPLOYED_PEASANT
        raw += dominion.building_alchemy * PLATINUM_PER_ALCHEMY
        return int(raw * self._multiplier(dominion, "midas_touch"))

    def get_food_production(self, dominion: Dominion) -> int:
        raw = dominion.building_farm * FOOD_PER_FARM + dominion.building_dock * FOOD_PER_DOCK
        return int(raw * self._multiplier(dominion, "gaias_watch"))

    def get_food_consumption(self, dominion: Dominion) -> int:
        return int(self.population.get_population(dominion) * FOOD_CONSUMPTION_PER_HEAD)

    def get_food_net_change(self, dominion: Dominion) -> int:
        decay = int(max(0, dominion.resource_food) * FOOD_DECAY)
        return self.get_food_production(dominion) - self.get_food_consumption(dominion) - decay

    def get_lumber_net_change(self, dominion: Dominion) -> int:
        production = dominion.building_lumberyard * LUMBER_PER_LUMBERYARD
        return production - int(dominion.resource_lumber * LUMBER_DECAY)

    def get_mana_net_change(self, dominion: Dominion) -> int:
        production = dominion.building_tower * MANA_PER_TOWER
        return production - int(dominion.resource_mana * MANA_DECAY)

    def get_ore_production(self, dominion: Dominion) -> int:
        raw = dominion.building_ore_mine * ORE_PER_ORE_MINE
        return int(raw * self._multiplier(dominion, "miners_sight"))

    def get_gem_production(self, dominion: Dominion) -> int:
        raw = dominion.building_diamond_mine * GEMS_PER_DIAMOND_MINE
        return int(raw * self._multiplier(dominion, "mining_strength"))

    def get_boat_production(self, dominion: Dominion) -> int:
        return dominion.building_dock // DOCKS_PER_BOAT
