"""Networth of a dominion.

Networth is a weighted sum: every acre, every building and every unit
contributes a fixed amount.
"""

from dominion.calculators.land import LandCalculator
from dominion.models import Dominion

NETWORTH_PER_ACRE = 20
NETWORTH_PER_BUILDING = 5

# Draftees and peasants do not count towards networth
NETWORTH_PER_UNIT: dict[str, float] = {
    "unit1": 5.0,
    "unit2": 5.0,
    "unit3": 9.0,
    "unit4": 12.0,
    "spies": 5.0,
    "wizards": 5.0,
    "archmages": 5.0,
}


class NetworthCalculator:
    def __init__(self, land: LandCalculator):
        self.land = land

    def get_dominion_networth(self, dominion: Dominion) -> int:
        networth = self.land.get_total_land(dominion) * NETWORTH_PER_ACRE
        networth += self.land.get_total_buildings(dominion) * NETWORTH_PER_BUILDING
        for unit, value in NETWORTH_PER_UNIT.items():
            networth += getattr(dominion, f"military_{unit}") * value
        return int(networth)
