"""
GreenTrack India: Grid Carbon Intensity Estimator
=================================================
Adjusts a state's baseline grid intensity (gCO₂/kWh) with live signals,
applied multiplicatively in this fixed order:

  1. Time of day    daytime sine trough (solar displacing coal), night ×1.15
  2. Pollution      PM2.5 bands; skipped when air quality is unavailable
  3. Solar          current shortwave radiation bands
  4. Cloud cover    >80 % → ×1.08
  5. Jitter         uniform [0.97, 1.03] measurement noise from `rng`

Radiation in [50, 200] W/m² receives no solar adjustment. This gap is kept
for compatibility with the dashboard's published figures.
"""

import math
import random
from datetime import datetime
from typing import Optional

from environment_service import local_hour
from models import AirQualitySnapshot, CarbonIntensityResult, EnvironmentalSnapshot, IntensityIndex
from reference_data import DEFAULT_REFERENCE, ReferenceData

JITTER_LOW  = 0.97
JITTER_HIGH = 1.03

# (upper bound exclusive, index)
INDEX_THRESHOLDS = [
    (450, IntensityIndex.very_low),
    (550, IntensityIndex.low),
    (650, IntensityIndex.moderate),
    (750, IntensityIndex.high),
]


def time_of_day_factor(hour: int) -> float:
    """1.0 at 06:00 and 18:00, 0.85 at noon, 1.15 overnight."""
    if 6 <= hour <= 18:
        return 1 - 0.15 * math.sin(math.pi * (hour - 6) / 12)
    return 1.15


def pollution_factor(air_quality: Optional[AirQualitySnapshot]) -> float:
    if air_quality is None or air_quality.pm25 is None:
        return 1.0
    pm25 = air_quality.pm25
    if pm25 > 150: return 1.25
    if pm25 > 100: return 1.15
    if pm25 > 50:  return 1.05
    # A zero reading still counts as clean air, unlike a missing one
    return 0.95


def solar_factor(current_radiation: float) -> float:
    if current_radiation > 600: return 0.85
    if current_radiation > 400: return 0.92
    if current_radiation > 200: return 0.97
    if current_radiation < 50:  return 1.12
    return 1.0


def cloud_factor(cloud_cover_pct: float) -> float:
    return 1.08 if cloud_cover_pct > 80 else 1.0


def classify_intensity(intensity: float) -> IntensityIndex:
    for upper, index in INDEX_THRESHOLDS:
        if intensity < upper:
            return index
    return IntensityIndex.very_high


def estimate_carbon_intensity(
    state: str,
    air_quality: Optional[AirQualitySnapshot],
    weather: EnvironmentalSnapshot,
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> CarbonIntensityResult:
    """
    Adjusted grid intensity for `state` right now.

    Pass a seeded `rng` (or one whose uniform() is fixed) for reproducible
    output; without one a fresh generator is used and results vary ±3 %.
    """
    rng = rng or random.Random()
    base = reference.base_intensity(state)

    adjusted = float(base)
    adjusted *= time_of_day_factor(local_hour(now))
    adjusted *= pollution_factor(air_quality)
    adjusted *= solar_factor(weather.solar.current_radiation_wm2)
    adjusted *= cloud_factor(weather.cloud_cover_pct)
    adjusted *= rng.uniform(JITTER_LOW, JITTER_HIGH)

    adjusted_int = int(round(adjusted))
    return CarbonIntensityResult(
        base_intensity=base,
        adjusted_intensity=adjusted_int,
        index=classify_intensity(adjusted_int),
    )
