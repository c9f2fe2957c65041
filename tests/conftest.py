import random
from datetime import datetime, timezone

import httpx
import pytest

from config import Settings

# 12:00 and 02:00 India Standard Time
NOON_IST  = datetime(2026, 3, 10, 6, 30, tzinfo=timezone.utc)
NIGHT_IST = datetime(2026, 3, 9, 20, 30, tzinfo=timezone.utc)

JAIPUR_DISPLAY = "Jaipur, Jaipur Municipal Corporation, Jaipur Tehsil, Jaipur District, Rajasthan, 302001, India"


class FixedRandom(random.Random):
    """uniform()/random() always return `value`."""

    def __init__(self, value: float = 1.0):
        super().__init__(0)
        self.value = value

    def uniform(self, a, b):
        return self.value

    def random(self):
        return self.value


def nominatim_payload(display_name=JAIPUR_DISPLAY, lat="26.9154576", lon="75.8189817"):
    return [{"lat": lat, "lon": lon, "display_name": display_name}]


def weather_payload(radiation=None, cloud_cover=20, wind_speed=5.5):
    radiation = radiation if radiation is not None else [0] * 6 + [100 * i for i in range(1, 13)] + [0] * 6
    return {
        "current": {
            "temperature_2m": 31.2,
            "relative_humidity_2m": 40,
            "surface_pressure": 958.4,
            "cloud_cover": cloud_cover,
            "wind_speed_10m": wind_speed,
        },
        "hourly": {
            "shortwave_radiation": radiation + [999] * 24,
            "direct_radiation": [r * 0.7 for r in radiation] + [0] * 24,
            "diffuse_radiation": [r * 0.3 for r in radiation] + [0] * 24,
        },
    }


def air_quality_payload(pm25=30.0):
    return {
        "current": {
            "pm10": 80.0,
            "pm2_5": pm25,
            "carbon_monoxide": 410.0,
            "nitrogen_dioxide": 22.5,
            "sulphur_dioxide": 8.1,
            "ozone": 60.0,
        }
    }


class Upstream:
    """
    Fake Nominatim / Open-Meteo / OpenRouter keyed by host.
    Each response is a JSON-able body, an int status code, or an exception.
    """

    def __init__(self, geocode=None, weather=None, air=None, chat=None):
        self.responses = {
            "nominatim.openstreetmap.org": nominatim_payload() if geocode is None else geocode,
            "api.open-meteo.com": weather_payload() if weather is None else weather,
            "air-quality-api.open-meteo.com": air_quality_payload() if air is None else air,
            "openrouter.ai": chat if chat is not None else 500,
        }
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses[request.url.host]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return httpx.Response(response, json={"error": "upstream"})
        return httpx.Response(200, json=response)

    def requests_to(self, host: str):
        return [r for r in self.requests if r.url.host == host]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def llm_settings():
    return Settings(openrouter_api_key="sk-test", openrouter_model="openai/gpt-3.5-turbo")


@pytest.fixture
def upstream():
    return Upstream()
