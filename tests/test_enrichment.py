import asyncio

import pytest

import enrichment
from enrichment import (
    SearchSession,
    carbon_intensity_for_location,
    enrich,
    footprint_section,
    renewable_potential_for_location,
)
from errors import LocationResolutionError, NotFoundError
from models import IntensityIndex, ResolvedLocation

from conftest import JAIPUR_DISPLAY, NOON_IST, FixedRandom, Upstream

NOMINATIM_HOST = "nominatim.openstreetmap.org"


async def test_enrich_jaipur(settings):
    upstream = Upstream()
    result = await enrich(
        "Jaipur", 200, now=NOON_IST, rng=FixedRandom(1.0),
        client=upstream.client(), settings=settings,
    )

    carbon = result.carbon
    assert carbon.state == "Rajasthan"
    assert carbon.location == JAIPUR_DISPLAY
    assert carbon.base_intensity == 520
    assert carbon.adjusted_intensity == 357
    assert carbon.index == IntensityIndex.very_low
    assert carbon.air_quality.pm25 == 30.0
    assert carbon.weather.source == "open-meteo"
    assert carbon.timestamp == NOON_IST

    renewable = result.renewable
    assert renewable.coordinates.lat == pytest.approx(26.9154576)
    assert renewable.solar.daily_radiation_wm2 == 325
    assert renewable.solar.current_radiation_wm2 == 700
    assert renewable.solar.potential.category == "Good"
    assert renewable.solar.estimated_output == "1.17 kWh per day per 1kW installed"
    assert renewable.wind.current_speed_ms == 5.5
    assert renewable.wind.potential.category == "Good"
    assert renewable.state_profile.total_mw == 22100

    footprint = result.footprint
    assert footprint.monthly_consumption == 200
    assert footprint.intensity == 357
    assert footprint.monthly_co2_kg == pytest.approx(71.4)
    assert footprint.annual_co2_kg == pytest.approx(856.8)
    assert footprint.trees_needed == 48
    assert footprint.comparison.national_avg_kg == pytest.approx(126)
    assert footprint.comparison.savings_kg == pytest.approx(54.6)

    assert len(upstream.requests_to(NOMINATIM_HOST)) == 1


async def test_enrich_degrades_when_weather_and_air_quality_fail(settings):
    upstream = Upstream(weather=500, air=503)
    result = await enrich(
        "Jaipur", now=NOON_IST, rng=FixedRandom(1.0),
        client=upstream.client(), settings=settings,
    )

    assert result.carbon.weather.source == "fallback"
    assert result.carbon.air_quality is None
    # 520 × 0.85 (noon) × 0.97 (400 W/m² fallback), pollution step skipped
    assert result.carbon.adjusted_intensity == round(520 * 0.85 * 0.97)
    assert result.renewable.solar.daily_radiation_wm2 == 350
    assert result.renewable.wind.potential.category == "Excellent"
    assert result.footprint.monthly_consumption == 100


async def test_enrich_unresolvable_location(settings):
    upstream = Upstream(geocode=[])
    with pytest.raises(LocationResolutionError) as excinfo:
        await enrich("Atlantis", client=upstream.client(), settings=settings)

    assert excinfo.value.not_found
    assert "Atlantis" in str(excinfo.value)
    assert upstream.requests_to("api.open-meteo.com") == []


async def test_enrich_geocoder_outage(settings):
    upstream = Upstream(geocode=503)
    with pytest.raises(LocationResolutionError) as excinfo:
        await enrich("Jaipur", client=upstream.client(), settings=settings)
    assert not excinfo.value.not_found


async def test_carbon_intensity_for_location(settings):
    upstream = Upstream()
    carbon = await carbon_intensity_for_location(
        "Jaipur", now=NOON_IST, rng=FixedRandom(1.0), client=upstream.client(), settings=settings,
    )
    assert carbon.state == "Rajasthan"
    assert carbon.adjusted_intensity == 357


async def test_renewable_potential_for_location(settings):
    upstream = Upstream()
    renewable = await renewable_potential_for_location(
        "Jaipur", now=NOON_IST, client=upstream.client(), settings=settings,
    )
    assert renewable.state == "Rajasthan"
    assert renewable.state_profile.potential_mw == 142000
    assert upstream.requests_to("air-quality-api.open-meteo.com")


def test_footprint_section_unknown_state():
    location = ResolvedLocation(latitude=0, longitude=0, display_name="Nowhere")
    section = footprint_section(location, 0, 630)
    assert section.state == "Unknown"
    assert section.monthly_co2_kg == 0
    assert section.trees_needed == 0
    assert section.comparison.savings_kg == 0


# ── SearchSession ─────────────────────────────────────────────────────────────

@pytest.fixture
def gated_enrich(monkeypatch):
    """Replaces the pipeline with one that waits on a per-query gate."""
    gates = {}

    async def fake_enrich(query, monthly_kwh=100.0, **kwargs):
        await gates.setdefault(query, asyncio.Event()).wait()
        if query.startswith("missing"):
            raise LocationResolutionError(query, NotFoundError(query))
        return f"result:{query}"

    monkeypatch.setattr(enrichment, "enrich", fake_enrich)

    def release(query):
        gates.setdefault(query, asyncio.Event()).set()

    return release


async def test_search_session_drops_superseded_result(gated_enrich):
    session = SearchSession()
    first = asyncio.create_task(session.search("Pune"))
    second = asyncio.create_task(session.search("Chennai"))
    await asyncio.sleep(0)

    gated_enrich("Chennai")
    assert await second == "result:Chennai"
    gated_enrich("Pune")
    assert await first is None

    assert session.latest == "result:Chennai"
    assert session.latest_sequence == 2


async def test_search_session_ignores_superseded_failure(gated_enrich):
    session = SearchSession()
    first = asyncio.create_task(session.search("missing place"))
    second = asyncio.create_task(session.search("Kochi"))
    await asyncio.sleep(0)

    gated_enrich("missing place")
    assert await first is None
    gated_enrich("Kochi")
    assert await second == "result:Kochi"


async def test_search_session_raises_current_failure(gated_enrich):
    session = SearchSession()
    gated_enrich("missing town")
    with pytest.raises(LocationResolutionError):
        await session.search("missing town")
    assert session.latest is None
