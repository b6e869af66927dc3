"""Default calculator implementations.

These satisfy the protocols in :mod:`dominion.interfaces` and are wired
together by :mod:`dominion.factory`.
"""

from dominion.calculators.casualties import CasualtiesCalculator
from dominion.calculators.land import LandCalculator
from dominion.calculators.networth import NetworthCalculator
from dominion.calculators.population import PopulationCalculator
from dominion.calculators.production import ProductionCalculator
from dominion.calculators.spell import SpellCalculator

__all__ = [
    "CasualtiesCalculator",
    "LandCalculator",
    "NetworthCalculator",
    "PopulationCalculator",
    "ProductionCalculator",
    "SpellCalculator",
]
