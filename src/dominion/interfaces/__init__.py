"""Protocol-based interfaces for the calculators used by the tick engine.

This module exports all calculator protocol interfaces, providing a clear
contract for implementations and enabling dependency injection and testing.
"""

from dominion.interfaces.calculators import (
    ICasualtiesCalculator,
    ILandCalculator,
    INetworthCalculator,
    IPopulationCalculator,
    IProductionCalculator,
    ISpellCalculator,
)

__all__ = [
    "ICasualtiesCalculator",
    "ILandCalculator",
    "INetworthCalculator",
    "IPopulationCalculator",
    "IProductionCalculator",
    "ISpellCalculator",
]
