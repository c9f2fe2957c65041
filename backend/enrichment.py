"""
GreenTrack India: Location Enrichment Pipeline
==============================================
  Step 1 → Geocode the place name (failure aborts the whole request)
  Step 2 → Concurrent fetch: Open-Meteo weather + air quality
  Step 3 → Carbon intensity from state baseline + live signals
  Step 4 → Renewable potential + state capacity profile
  Step 5 → Household footprint vs national average

Weather and air-quality failures degrade to their fallbacks; they never fail
the request.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

import geocoder
from carbon_intensity import estimate_carbon_intensity
from config import Settings, get_settings
from environment_service import fetch_air_quality, fetch_weather
from errors import LocationResolutionError, NotFoundError, TransportError
from footprint import calculate_footprint
from models import (
    AirQualitySnapshot,
    CarbonSection,
    Coordinates,
    EnrichmentResult,
    EnvironmentalSnapshot,
    FootprintComparison,
    FootprintSection,
    RenewableSection,
    ResolvedLocation,
    SolarSection,
    WindSection,
)
from reference_data import DEFAULT_REFERENCE, ReferenceData
from renewable_potential import estimate_renewable_potential, state_renewable_profile

logger = logging.getLogger(__name__)


@dataclass
class LocationData:
    location: ResolvedLocation
    weather: EnvironmentalSnapshot
    air_quality: Optional[AirQualitySnapshot]
    timestamp: datetime


async def gather_location_data(
    query: str,
    *,
    now: Optional[datetime] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> LocationData:
    """Geocode once, then fetch weather and air quality concurrently."""
    settings = settings or get_settings()
    try:
        location = await geocoder.resolve(query, client=client, settings=settings, reference=reference)
    except (NotFoundError, TransportError) as e:
        logger.warning(f"[Enrich] could not resolve '{query}': {e}")
        raise LocationResolutionError(query, e) from e

    weather, air_quality = await asyncio.gather(
        fetch_weather(location.latitude, location.longitude, now=now, client=client, settings=settings),
        fetch_air_quality(location.latitude, location.longitude, client=client, settings=settings),
    )
    logger.info(
        f"[Enrich] {location.state}: weather={weather.source} "
        f"air_quality={'ok' if air_quality else 'unavailable'}"
    )
    return LocationData(
        location=location,
        weather=weather,
        air_quality=air_quality,
        timestamp=now or datetime.now(timezone.utc),
    )


def _carbon_section(data: LocationData, now, rng, reference) -> CarbonSection:
    intensity = estimate_carbon_intensity(
        data.location.state, data.air_quality, data.weather,
        now=now, rng=rng, reference=reference,
    )
    return CarbonSection(
        **intensity.model_dump(),
        location=data.location.display_name,
        state=data.location.state,
        air_quality=data.air_quality,
        weather=data.weather,
        timestamp=data.timestamp,
    )


def _renewable_section(data: LocationData, settings, reference) -> RenewableSection:
    potential = estimate_renewable_potential(data.weather, settings)
    solar = data.weather.solar
    return RenewableSection(
        location=data.location.display_name,
        state=data.location.state,
        coordinates=Coordinates(lat=data.location.latitude, lon=data.location.longitude),
        solar=SolarSection(
            daily_radiation_wm2=solar.avg_daily_radiation_wm2,
            current_radiation_wm2=solar.current_radiation_wm2,
            potential=potential.solar,
            estimated_output=f"{potential.solar.daily_kwh_per_kw} kWh per day per 1kW installed",
        ),
        wind=WindSection(current_speed_ms=data.weather.wind_speed_ms, potential=potential.wind),
        state_profile=state_renewable_profile(data.location.state, reference),
        weather=data.weather,
        timestamp=data.timestamp,
    )


def footprint_section(
    location: ResolvedLocation,
    monthly_kwh: float,
    intensity: int,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> FootprintSection:
    monthly = calculate_footprint(monthly_kwh, intensity)
    national = calculate_footprint(monthly_kwh, reference.national_average_intensity)
    return FootprintSection(
        location=location.display_name,
        state=location.state,
        monthly_consumption=monthly_kwh,
        intensity=intensity,
        footprint=monthly,
        monthly_co2_kg=monthly.co2_kg,
        annual_co2_kg=monthly.co2_kg * 12,
        trees_needed=monthly.trees_per_year * 12,
        comparison=FootprintComparison(
            national_avg_kg=national.co2_kg,
            savings_kg=national.co2_kg - monthly.co2_kg,
        ),
    )


async def enrich(
    query: str,
    monthly_kwh: float = 100.0,
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> EnrichmentResult:
    """Full aggregate for one place + monthly consumption. Raises LocationResolutionError."""
    settings = settings or get_settings()
    logger.info(f"[Enrich] location='{query}' monthly_kwh={monthly_kwh}")

    data = await gather_location_data(query, now=now, client=client, settings=settings, reference=reference)
    carbon = _carbon_section(data, now, rng, reference)
    renewable = _renewable_section(data, settings, reference)
    footprint = footprint_section(data.location, monthly_kwh, carbon.adjusted_intensity, reference)

    logger.info(
        f"[Enrich] {data.location.state}: intensity={carbon.adjusted_intensity} ({carbon.index.value}) "
        f"solar={renewable.solar.potential.category} wind={renewable.wind.potential.category} "
        f"monthly_co2={footprint.monthly_co2_kg:.1f}kg"
    )
    return EnrichmentResult(carbon=carbon, renewable=renewable, footprint=footprint)


async def carbon_intensity_for_location(
    query: str,
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> CarbonSection:
    data = await gather_location_data(query, now=now, client=client, settings=settings, reference=reference)
    return _carbon_section(data, now, rng, reference)


async def renewable_potential_for_location(
    query: str,
    *,
    now: Optional[datetime] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> RenewableSection:
    settings = settings or get_settings()
    data = await gather_location_data(query, now=now, client=client, settings=settings, reference=reference)
    return _renewable_section(data, settings, reference)


class SearchSession:
    """
    Keeps only the newest search result.

    Every search takes a ticket from a monotonically increasing counter; a
    result that completes after a newer search was issued is discarded.
    """

    def __init__(self, **pipeline_kwargs):
        self._pipeline_kwargs = pipeline_kwargs
        self._issued = 0
        self.latest: Optional[EnrichmentResult] = None
        self.latest_sequence = 0

    def _next_ticket(self) -> int:
        self._issued += 1
        return self._issued

    def is_current(self, ticket: int) -> bool:
        return ticket == self._issued

    async def search(self, query: str, monthly_kwh: float = 100.0) -> Optional[EnrichmentResult]:
        ticket = self._next_ticket()
        try:
            result = await enrich(query, monthly_kwh, **self._pipeline_kwargs)
        except LocationResolutionError:
            if not self.is_current(ticket):
                logger.info(f"[Search] ignoring failure of superseded search #{ticket} for '{query}'")
                return None
            raise
        if not self.is_current(ticket):
            logger.info(f"[Search] dropping stale result #{ticket} for '{query}' (latest #{self._issued})")
            return None
        self.latest = result
        self.latest_sequence = ticket
        return result
