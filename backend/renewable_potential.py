"""
GreenTrack India: Renewable Potential Estimator
Solar yield per installed kW from average daily radiation (15 % panel
efficiency), a reference-rooftop projection, and wind suitability bands.
"""

from typing import Optional

from config import Settings, get_settings
from models import (
    EnvironmentalSnapshot,
    RenewablePotential,
    RooftopEstimate,
    SolarPotential,
    StateRenewableProfile,
    WindPotential,
)
from reference_data import DEFAULT_REFERENCE, GENERIC_POTENTIAL_MW, ReferenceData

PANEL_EFFICIENCY     = 0.15
DAYS_PER_YEAR        = 365
GRID_CO2_KG_PER_KWH  = 0.63   # national average, 630 g/kWh

# (min speed exclusive m/s, category, suitability, turbine W per m/s)
WIND_BANDS = [
    (6, "Excellent", "Excellent for Wind Farms",       100),
    (5, "Good",      "Good for Small Wind Turbines",   80),
    (4, "Moderate",  "Moderate – Small Scale Possible", 50),
    (3, "Low",       "Low – Not Recommended",          30),
]


def solar_category(avg_daily_radiation: float) -> str:
    if avg_daily_radiation > 600: return "Excellent"
    if avg_daily_radiation > 450: return "Very Good"
    if avg_daily_radiation > 300: return "Good"
    if avg_daily_radiation < 200: return "Poor"
    return "Moderate"


def estimate_solar(avg_daily_radiation: float, settings: Optional[Settings] = None) -> SolarPotential:
    settings = settings or get_settings()
    daily_per_kw  = avg_daily_radiation * 24 * PANEL_EFFICIENCY / 1000
    annual_per_kw = daily_per_kw * DAYS_PER_YEAR
    capacity      = settings.rooftop_capacity_kw

    rooftop = RooftopEstimate(
        area_m2=settings.rooftop_area_m2,
        capacity_kw=capacity,
        daily_kwh=round(daily_per_kw * capacity, 2),
        annual_kwh=round(annual_per_kw * capacity, 1),
        co2_saved_kg=round(annual_per_kw * capacity * GRID_CO2_KG_PER_KWH, 1),
        savings_inr=round(annual_per_kw * capacity * settings.tariff_inr_per_kwh),
    )
    return SolarPotential(
        daily_kwh_per_kw=round(daily_per_kw, 2),
        annual_kwh_per_kw=round(annual_per_kw),
        category=solar_category(avg_daily_radiation),
        rooftop_estimate=rooftop,
    )


def estimate_wind(wind_speed: float) -> WindPotential:
    for threshold, category, suitability, watts_per_ms in WIND_BANDS:
        if wind_speed > threshold:
            return WindPotential(
                wind_speed_ms=wind_speed,
                category=category,
                suitability_text=suitability,
                commercial_viability=wind_speed > 5,
                estimated_capacity_w=round(wind_speed * watts_per_ms),
            )
    return WindPotential(
        wind_speed_ms=wind_speed,
        category="Not Suitable",
        suitability_text="Not Suitable",
        commercial_viability=False,
        estimated_capacity_w=0,
    )


def estimate_renewable_potential(
    weather: EnvironmentalSnapshot,
    settings: Optional[Settings] = None,
) -> RenewablePotential:
    return RenewablePotential(
        solar=estimate_solar(weather.solar.avg_daily_radiation_wm2, settings),
        wind=estimate_wind(weather.wind_speed_ms),
    )


def state_renewable_profile(
    state: str,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> StateRenewableProfile:
    """Installed capacity for `state`, or a generic profile when untracked."""
    row = reference.renewable_capacity.get(state)
    if row is None:
        return StateRenewableProfile(state=state, potential_mw=GENERIC_POTENTIAL_MW)

    solar, wind, total, potential, utilisation = row
    return StateRenewableProfile(
        state=state,
        solar_mw=solar,
        wind_mw=wind,
        total_mw=total,
        potential_mw=potential,
        utilization_rate_pct=utilisation,
        progress_to_target_pct=round(total / potential * 100, 1),
    )
