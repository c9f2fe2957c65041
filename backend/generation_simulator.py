"""
GreenTrack India: National Generation Simulator
Simulated (not measured) real-time renewable generation for the dashboard
ticker, refreshed by the client every 30 seconds. Independent of the
location enrichment pipeline.
"""

import math
import random
from datetime import datetime, timezone
from typing import Optional

from environment_service import local_hour
from models import GenerationSnapshot

# Installed capacity (MW) and typical availability
SOLAR_CAPACITY_MW   = 72000
WIND_CAPACITY_MW    = 42000
HYDRO_CAPACITY_MW   = 51000
BIOMASS_CAPACITY_MW = 10000

SOLAR_AVAILABILITY   = 0.8
WIND_AVAILABILITY    = 0.7
HYDRO_AVAILABILITY   = 0.6
BIOMASS_AVAILABILITY = 0.75

BASE_GRID_LOAD_MW  = 150000
GRID_LOAD_SWING_MW = 50000


def daylight_factor(hour: int) -> float:
    """0-1 sine curve between 06:00 and 18:00, zero at night."""
    if 6 <= hour <= 18:
        return math.sin(math.pi * (hour - 6) / 12)
    return 0.0


def simulate_realtime_generation(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> GenerationSnapshot:
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()

    wind_factor = 0.5 + rng.random() * 0.5

    solar   = math.floor(SOLAR_CAPACITY_MW * daylight_factor(local_hour(now)) * SOLAR_AVAILABILITY)
    wind    = math.floor(WIND_CAPACITY_MW * wind_factor * WIND_AVAILABILITY)
    hydro   = math.floor(HYDRO_CAPACITY_MW * HYDRO_AVAILABILITY)
    biomass = math.floor(BIOMASS_CAPACITY_MW * BIOMASS_AVAILABILITY)
    total   = solar + wind + hydro + biomass
    load    = math.floor(BASE_GRID_LOAD_MW + rng.random() * GRID_LOAD_SWING_MW)

    return GenerationSnapshot(
        timestamp=now,
        solar_mw=solar,
        wind_mw=wind,
        hydro_mw=hydro,
        biomass_mw=biomass,
        total_mw=total,
        grid_load_mw=load,
        renewable_percentage=round(total / load * 100, 1),
    )
