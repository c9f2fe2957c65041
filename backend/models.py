"""
GreenTrack India: Pydantic Data Models
Pipeline entities (location, environment, carbon, renewable, footprint,
advisory) plus the request/response bodies of the HTTP API.
"""
from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from reference_data import UNKNOWN_STATE


# ── Location ──────────────────────────────────────────────────────────────────

class ResolvedLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    display_name: str
    state: str = UNKNOWN_STATE


# ── Environment ───────────────────────────────────────────────────────────────

class SolarProfile(BaseModel):
    current_radiation_wm2: float
    direct_radiation_wm2: float
    diffuse_radiation_wm2: float
    avg_daily_radiation_wm2: float


class EnvironmentalSnapshot(BaseModel):
    temperature_c: float
    humidity_pct: float
    pressure_hpa: float
    cloud_cover_pct: float
    wind_speed_ms: float
    solar: SolarProfile
    source: Literal["open-meteo", "fallback"] = "open-meteo"


class AirQualityIndex(BaseModel):
    label: str
    level: int = Field(..., ge=1, le=6)
    color_tag: str


class AirQualitySnapshot(BaseModel):
    pm10: Optional[float] = None
    pm25: Optional[float] = None
    co: Optional[float] = None
    no2: Optional[float] = None
    so2: Optional[float] = None
    o3: Optional[float] = None
    aqi: AirQualityIndex


# ── Carbon intensity ──────────────────────────────────────────────────────────

class IntensityIndex(str, Enum):
    very_low  = "very-low"
    low       = "low"
    moderate  = "moderate"
    high      = "high"
    very_high = "very-high"


class CarbonIntensityResult(BaseModel):
    base_intensity: int        # gCO₂/kWh
    adjusted_intensity: int    # gCO₂/kWh
    index: IntensityIndex


# ── Renewable potential ───────────────────────────────────────────────────────

class RooftopEstimate(BaseModel):
    area_m2: float
    capacity_kw: float
    daily_kwh: float
    annual_kwh: float
    co2_saved_kg: float
    savings_inr: int


class SolarPotential(BaseModel):
    daily_kwh_per_kw: float
    annual_kwh_per_kw: int
    category: Literal["Poor", "Moderate", "Good", "Very Good", "Excellent"]
    rooftop_estimate: RooftopEstimate


class WindPotential(BaseModel):
    wind_speed_ms: float
    category: Literal["Low", "Moderate", "Good", "Excellent", "Not Suitable"]
    suitability_text: str
    commercial_viability: bool
    estimated_capacity_w: int = 0   # per small turbine


class RenewablePotential(BaseModel):
    solar: SolarPotential
    wind: WindPotential


class StateRenewableProfile(BaseModel):
    state: str
    solar_mw: float = 0
    wind_mw: float = 0
    total_mw: float = 0
    potential_mw: float
    utilization_rate_pct: float = 0
    progress_to_target_pct: float = 0


# ── Footprint ─────────────────────────────────────────────────────────────────

class FootprintResult(BaseModel):
    co2_kg: float
    co2e_kg: float
    trees_per_year: int


# ── Advisory ──────────────────────────────────────────────────────────────────

class AdvisoryMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class SchemeLink(BaseModel):
    name: str
    description: str
    url: str
    label: str = "Apply Here"


class AdviceStep(BaseModel):
    title: str
    body: str = ""
    benefit: Optional[str] = None
    links: List[SchemeLink] = Field(default_factory=list)


# ── Enrichment aggregate ──────────────────────────────────────────────────────

class Coordinates(BaseModel):
    lat: float
    lon: float


class CarbonSection(CarbonIntensityResult):
    location: str
    state: str
    air_quality: Optional[AirQualitySnapshot] = None
    weather: EnvironmentalSnapshot
    timestamp: datetime


class SolarSection(BaseModel):
    daily_radiation_wm2: float
    current_radiation_wm2: float
    potential: SolarPotential
    estimated_output: str


class WindSection(BaseModel):
    current_speed_ms: float
    potential: WindPotential


class RenewableSection(BaseModel):
    location: str
    state: str
    coordinates: Coordinates
    solar: SolarSection
    wind: WindSection
    state_profile: StateRenewableProfile
    weather: EnvironmentalSnapshot
    timestamp: datetime


class FootprintComparison(BaseModel):
    national_avg_kg: float
    savings_kg: float


class FootprintSection(BaseModel):
    location: str
    state: str
    monthly_consumption: float
    intensity: int
    footprint: FootprintResult
    monthly_co2_kg: float
    annual_co2_kg: float
    trees_needed: int
    comparison: FootprintComparison


class EnrichmentResult(BaseModel):
    carbon: CarbonSection
    renewable: RenewableSection
    footprint: FootprintSection


# ── API bodies ────────────────────────────────────────────────────────────────

class EnrichRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    location: str = Field(..., min_length=1, description="Free-text Indian place name")
    monthly_kwh: float = Field(default=100.0, description="Monthly household consumption (kWh)")


class FootprintRequest(BaseModel):
    kwh: float
    intensity: float = Field(default=500.0, description="gCO₂/kWh")


class ChatRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(..., min_length=1)
    history: List[AdvisoryMessage] = Field(default_factory=list)


class ChatResponse(BaseModel):
    reply: str
    generated_by: str


class GenerationSnapshot(BaseModel):
    timestamp: datetime
    solar_mw: int
    wind_mw: int
    hydro_mw: int
    biomass_mw: int
    total_mw: int
    grid_load_mw: int
    renewable_percentage: float


class HealthResponse(BaseModel):
    status: str
    version: str
    services: dict
