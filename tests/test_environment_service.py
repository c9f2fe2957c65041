import httpx
import pytest

from environment_service import (
    FALLBACK_WEATHER,
    classify_aqi,
    daily_average,
    fetch_air_quality,
    fetch_weather,
    local_hour,
)

from conftest import NIGHT_IST, NOON_IST, Upstream, air_quality_payload, weather_payload


def test_local_hour_is_india_standard_time():
    assert local_hour(NOON_IST) == 12
    assert local_hour(NIGHT_IST) == 2


async def test_fetch_weather_reads_current_and_hourly(settings):
    upstream = Upstream()
    weather = await fetch_weather(26.9, 75.8, now=NOON_IST, client=upstream.client(), settings=settings)

    assert weather.source == "open-meteo"
    assert weather.temperature_c == 31.2
    assert weather.cloud_cover_pct == 20
    assert weather.wind_speed_ms == 5.5
    # index 12 of the hourly series is 700 W/m²
    assert weather.solar.current_radiation_wm2 == 700
    assert weather.solar.direct_radiation_wm2 == pytest.approx(490)
    assert weather.solar.diffuse_radiation_wm2 == pytest.approx(210)
    assert weather.solar.avg_daily_radiation_wm2 == 325


async def test_fetch_weather_query_parameters(settings):
    upstream = Upstream()
    await fetch_weather(26.9, 75.8, now=NOON_IST, client=upstream.client(), settings=settings)

    params = dict(upstream.requests_to("api.open-meteo.com")[0].url.params)
    assert params == {
        "latitude": "26.9",
        "longitude": "75.8",
        "current": "temperature_2m,relative_humidity_2m,surface_pressure,cloud_cover,wind_speed_10m",
        "hourly": "shortwave_radiation,direct_radiation,diffuse_radiation",
        "wind_speed_unit": "ms",
        "timezone": "Asia/Kolkata",
    }


async def test_fetch_air_quality_query_parameters(settings):
    upstream = Upstream()
    await fetch_air_quality(26.9, 75.8, client=upstream.client(), settings=settings)

    params = dict(upstream.requests_to("air-quality-api.open-meteo.com")[0].url.params)
    assert params["current"] == "pm10,pm2_5,carbon_monoxide,nitrogen_dioxide,sulphur_dioxide,ozone"
    assert params["timezone"] == "Asia/Kolkata"


async def test_fetch_weather_uses_hour_of_day_index(settings):
    upstream = Upstream()
    weather = await fetch_weather(26.9, 75.8, now=NIGHT_IST, client=upstream.client(), settings=settings)
    assert weather.solar.current_radiation_wm2 == 0


@pytest.mark.parametrize("response", [
    500,
    httpx.ReadTimeout("slow"),
    {"current": {}},
    {"current": weather_payload()["current"], "hourly": {"shortwave_radiation": []}},
])
async def test_fetch_weather_falls_back(settings, response):
    upstream = Upstream(weather=response)
    weather = await fetch_weather(26.9, 75.8, now=NOON_IST, client=upstream.client(), settings=settings)

    assert weather.source == "fallback"
    assert weather.temperature_c == 28
    assert weather.humidity_pct == 65
    assert weather.pressure_hpa == 1013
    assert weather.cloud_cover_pct == 30
    assert weather.wind_speed_ms == 12
    assert weather.solar.current_radiation_wm2 == 400
    assert weather.solar.direct_radiation_wm2 == 300
    assert weather.solar.diffuse_radiation_wm2 == 100
    assert weather.solar.avg_daily_radiation_wm2 == 350


async def test_fallback_snapshot_is_not_shared(settings):
    upstream = Upstream(weather=500)
    first = await fetch_weather(0, 0, client=upstream.client(), settings=settings)
    first.solar.avg_daily_radiation_wm2 = 1
    second = await fetch_weather(0, 0, client=upstream.client(), settings=settings)
    assert second.solar.avg_daily_radiation_wm2 == 350
    assert FALLBACK_WEATHER.solar.avg_daily_radiation_wm2 == 350


def test_daily_average_uses_first_day_only():
    assert daily_average([10] * 24 + [1000] * 24) == 10
    assert daily_average([1, 2]) == 2
    assert daily_average([None, 4, None, 6]) == 5
    assert daily_average([]) == 0


async def test_fetch_air_quality(settings):
    upstream = Upstream(air=air_quality_payload(pm25=42.0))
    aq = await fetch_air_quality(26.9, 75.8, client=upstream.client(), settings=settings)

    assert aq.pm25 == 42.0
    assert aq.pm10 == 80.0
    assert aq.no2 == 22.5
    assert aq.aqi.label == "Unhealthy for Sensitive Groups"
    assert aq.aqi.level == 3


@pytest.mark.parametrize("response", [
    502,
    httpx.ConnectError("refused"),
    {"current": {"pm10": 12.0}},
    {"hourly": {}},
])
async def test_fetch_air_quality_unavailable(settings, response):
    upstream = Upstream(air=response)
    assert await fetch_air_quality(26.9, 75.8, client=upstream.client(), settings=settings) is None


@pytest.mark.parametrize("pm25, label, level", [
    (0, "Good", 1),
    (12.0, "Good", 1),
    (12.1, "Moderate", 2),
    (35.4, "Moderate", 2),
    (55.4, "Unhealthy for Sensitive Groups", 3),
    (150.0, "Unhealthy", 4),
    (250.4, "Very Unhealthy", 5),
    (300.0, "Hazardous", 6),
])
def test_classify_aqi(pm25, label, level):
    index = classify_aqi(pm25)
    assert (index.label, index.level) == (label, level)
