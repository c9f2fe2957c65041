"""
GreenTrack India: Carbon Footprint Calculator
Pure conversion of electricity use into CO₂ mass and tree offsets.
Inputs are not validated; zero or negative kWh pass straight through.
"""

import math

from models import FootprintResult

DEFAULT_INTENSITY   = 500      # gCO₂/kWh
CO2E_FACTOR         = 1.1      # CO₂ → CO₂-equivalent (other GHGs)
TREE_G_CO2_PER_YEAR = 21_000   # one mature tree absorbs ~21 kg CO₂/year


def calculate_footprint(kwh: float, intensity: float = DEFAULT_INTENSITY) -> FootprintResult:
    grams = kwh * intensity
    return FootprintResult(
        co2_kg=grams / 1000,
        co2e_kg=grams * CO2E_FACTOR / 1000,
        trees_per_year=math.ceil(grams / TREE_G_CO2_PER_YEAR),
    )
