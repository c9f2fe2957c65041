"""
GreenTrack India: Runtime Configuration
Reads endpoints, credentials and tunable constants from the environment.
Secrets are never embedded in code; .env files are loaded by main.py.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

NOMINATIM_URL     = "https://nominatim.openstreetmap.org/search"
OPEN_METEO_URL    = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL   = "https://air-quality-api.open-meteo.com/v1/air-quality"
OPENROUTER_URL    = "https://openrouter.ai/api/v1/chat/completions"

LOCAL_TIMEZONE    = "Asia/Kolkata"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    openrouter_api_key: str = ""
    openrouter_url: str = OPENROUTER_URL
    openrouter_model: str = "openai/gpt-3.5-turbo"
    app_origin: str = "http://localhost:5173"
    app_title: str = "GreenTrack India AI"
    geocoder_user_agent: str = "GreenTrack-India-Platform"
    http_timeout: float = 15.0

    # Rooftop projection assumptions (no documented source, kept tunable)
    rooftop_area_m2: float = 100.0
    rooftop_capacity_kw: float = 10.0
    tariff_inr_per_kwh: float = 6.0

    allowed_origins: tuple[str, ...] = ("http://localhost:5173", "http://localhost:3000")

    @property
    def llm_configured(self) -> bool:
        return bool(self.openrouter_api_key)


def load_settings() -> Settings:
    """Build a Settings instance from the current environment."""
    origins = os.getenv("ALLOWED_ORIGINS", "")
    return Settings(
        openrouter_api_key=os.getenv("OPENROUTER_API_KEY", "").strip(),
        openrouter_url=os.getenv("OPENROUTER_API_URL", OPENROUTER_URL),
        openrouter_model=os.getenv("OPENROUTER_MODEL", "openai/gpt-3.5-turbo"),
        app_origin=os.getenv("APP_ORIGIN", "http://localhost:5173"),
        geocoder_user_agent=os.getenv("GEOCODER_USER_AGENT", "GreenTrack-India-Platform"),
        http_timeout=_env_float("HTTP_TIMEOUT_SECONDS", 15.0),
        rooftop_area_m2=_env_float("ROOFTOP_AREA_M2", 100.0),
        rooftop_capacity_kw=_env_float("ROOFTOP_CAPACITY_KW", 10.0),
        tariff_inr_per_kwh=_env_float("TARIFF_INR_PER_KWH", 6.0),
        allowed_origins=tuple(o.strip() for o in origins.split(",") if o.strip())
        or Settings.allowed_origins,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once at first use."""
    return load_settings()
