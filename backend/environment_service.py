"""
GreenTrack India: Environmental Data Service
Current weather + hourly solar radiation from Open-Meteo forecast, and
current pollutant readings from the Open-Meteo air-quality endpoint.

Contracts:
  fetch_weather      never raises; substitutes FALLBACK_WEATHER on failure
  fetch_air_quality  returns None on failure (air quality is optional)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from config import AIR_QUALITY_URL, LOCAL_TIMEZONE, OPEN_METEO_URL, Settings, get_settings
from errors import DegradedDataError
from http_client import get_json
from models import AirQualityIndex, AirQualitySnapshot, EnvironmentalSnapshot, SolarProfile

logger = logging.getLogger(__name__)

# Asia/Kolkata has no DST
IST = timezone(timedelta(hours=5, minutes=30), name="IST")

FALLBACK_WEATHER = EnvironmentalSnapshot(
    temperature_c=28,
    humidity_pct=65,
    pressure_hpa=1013,
    cloud_cover_pct=30,
    wind_speed_ms=12,
    solar=SolarProfile(
        current_radiation_wm2=400,
        direct_radiation_wm2=300,
        diffuse_radiation_wm2=100,
        avg_daily_radiation_wm2=350,
    ),
    source="fallback",
)

# Simplified AQI on PM2.5 (µg/m³): (upper bound, label, level, colour)
AQI_BANDS = [
    (12.0,  "Good",                           1, "green"),
    (35.4,  "Moderate",                       2, "yellow"),
    (55.4,  "Unhealthy for Sensitive Groups", 3, "orange"),
    (150.4, "Unhealthy",                      4, "red"),
    (250.4, "Very Unhealthy",                 5, "purple"),
]
AQI_HAZARDOUS = ("Hazardous", 6, "maroon")


def local_hour(now: Optional[datetime] = None) -> int:
    """Hour of day (0-23) in India Standard Time."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(IST).hour


# ── Weather + solar ───────────────────────────────────────────────────────────

async def fetch_weather(
    lat: float,
    lon: float,
    *,
    now: Optional[datetime] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> EnvironmentalSnapshot:
    settings = settings or get_settings()
    params = {
        "latitude":  lat,
        "longitude": lon,
        "current":   "temperature_2m,relative_humidity_2m,surface_pressure,cloud_cover,wind_speed_10m",
        "hourly":    "shortwave_radiation,direct_radiation,diffuse_radiation",
        "wind_speed_unit": "ms",
        "timezone":  LOCAL_TIMEZONE,
    }

    result = await get_json(OPEN_METEO_URL, params=params, client=client, timeout=settings.http_timeout)
    if not result.ok:
        logger.warning(f"[Weather] Open-Meteo failed ({result.error}), using fallback snapshot.")
        return FALLBACK_WEATHER.model_copy(deep=True)

    try:
        snapshot = parse_weather(result.data, local_hour(now))
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning(f"[Weather] unreadable Open-Meteo payload ({e!r}), using fallback snapshot.")
        return FALLBACK_WEATHER.model_copy(deep=True)

    logger.info(
        f"[Weather] temp={snapshot.temperature_c}°C cloud={snapshot.cloud_cover_pct}% "
        f"wind={snapshot.wind_speed_ms} rad={snapshot.solar.current_radiation_wm2}W/m² "
        f"(lat={lat}, lon={lon})"
    )
    return snapshot


def parse_weather(data: dict, hour: int) -> EnvironmentalSnapshot:
    current = data["current"]
    hourly = data["hourly"]
    return EnvironmentalSnapshot(
        temperature_c=current["temperature_2m"],
        humidity_pct=current["relative_humidity_2m"],
        pressure_hpa=current["surface_pressure"],
        cloud_cover_pct=current["cloud_cover"],
        wind_speed_ms=current["wind_speed_10m"],
        solar=SolarProfile(
            current_radiation_wm2=hourly["shortwave_radiation"][hour],
            direct_radiation_wm2=hourly["direct_radiation"][hour],
            diffuse_radiation_wm2=hourly["diffuse_radiation"][hour],
            avg_daily_radiation_wm2=daily_average(hourly["shortwave_radiation"]),
        ),
    )


def daily_average(series: list) -> int:
    """Mean of the first 24 hourly samples, rounded to whole W/m²."""
    day = [v for v in series[:24] if v is not None]
    if not day:
        return 0
    return round(sum(day) / len(day))


# ── Air quality ───────────────────────────────────────────────────────────────

async def fetch_air_quality(
    lat: float,
    lon: float,
    *,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> Optional[AirQualitySnapshot]:
    settings = settings or get_settings()
    params = {
        "latitude":  lat,
        "longitude": lon,
        "current":   "pm10,pm2_5,carbon_monoxide,nitrogen_dioxide,sulphur_dioxide,ozone",
        "timezone":  LOCAL_TIMEZONE,
    }

    result = await get_json(AIR_QUALITY_URL, params=params, client=client, timeout=settings.http_timeout)
    if not result.ok:
        logger.warning(f"[AirQuality] request failed ({result.error}); section unavailable.")
        return None

    try:
        snapshot = parse_air_quality(result.data)
    except DegradedDataError as e:
        logger.warning(f"[AirQuality] {e}; section unavailable.")
        return None

    logger.info(f"[AirQuality] pm2.5={snapshot.pm25} AQI={snapshot.aqi.label} (lat={lat}, lon={lon})")
    return snapshot


def parse_air_quality(data: dict) -> AirQualitySnapshot:
    try:
        current = data["current"]
        pm25 = current["pm2_5"]
        return AirQualitySnapshot(
            pm10=current.get("pm10"),
            pm25=pm25,
            co=current.get("carbon_monoxide"),
            no2=current.get("nitrogen_dioxide"),
            so2=current.get("sulphur_dioxide"),
            o3=current.get("ozone"),
            aqi=classify_aqi(pm25),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DegradedDataError(f"unreadable air-quality payload ({e!r})") from e


def classify_aqi(pm25: float) -> AirQualityIndex:
    if pm25 is None:
        raise TypeError("pm2_5 reading missing")
    for upper, label, level, colour in AQI_BANDS:
        if pm25 <= upper:
            return AirQualityIndex(label=label, level=level, color_tag=colour)
    label, level, colour = AQI_HAZARDOUS
    return AirQualityIndex(label=label, level=level, color_tag=colour)
