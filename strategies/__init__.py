"""
Strategy modules for the Blueprint Engine.

Each module is a pure function of an EnvironmentalSnapshot:
- Water (rainfall bands + coastal/elevation modifiers)
- Food (climate zone dispatch + growing season model)
- Shelter (climate zone dispatch + terrain/flood/coastal/wind modifiers)
- Energy (primary-source priority cascade)
- Risks (independent hazard checks)
"""

from strategies.water import water_strategy
from strategies.food import food_strategy
from strategies.shelter import shelter_strategy
from strategies.energy import energy_strategy
from strategies.risks import risks_assessment

__all__ = [
    "water_strategy",
    "food_strategy",
    "shelter_strategy",
    "energy_strategy",
    "risks_assessment",
]
