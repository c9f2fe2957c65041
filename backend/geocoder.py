"""
GreenTrack India: Geocoder
Resolves a free-text place name to coordinates and an Indian state using
Nominatim (OpenStreetMap). Only the first search result is used.
"""

import logging
from typing import Optional

import httpx

from config import NOMINATIM_URL, Settings, get_settings
from errors import NotFoundError, TransportError
from http_client import get_json
from models import ResolvedLocation
from reference_data import DEFAULT_REFERENCE, NCT_DELHI, UNKNOWN_STATE, ReferenceData

logger = logging.getLogger(__name__)


async def resolve(
    query: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    reference: ReferenceData = DEFAULT_REFERENCE,
) -> ResolvedLocation:
    """
    Geocode `query` within India.

    Raises NotFoundError when the search has no hits and TransportError when
    the request fails or the payload cannot be read.
    """
    if not query or not query.strip():
        raise ValueError("Location query must not be empty")

    settings = settings or get_settings()
    params = {"q": f"{query}, India", "format": "json", "limit": 1}
    headers = {"User-Agent": settings.geocoder_user_agent}

    result = await get_json(
        NOMINATIM_URL, params=params, headers=headers,
        client=client, timeout=settings.http_timeout,
    )
    if not result.ok:
        logger.warning(f"[Geocoder] lookup for '{query}' failed: {result.error}")
        raise TransportError(f"Geocoding failed: {result.error}")

    data = result.data
    if not isinstance(data, list):
        raise TransportError("Geocoding failed: expected a JSON array")
    if not data:
        logger.info(f"[Geocoder] no match for '{query}'")
        raise NotFoundError(f"Location not found: {query}")

    first = data[0]
    try:
        lat = float(first["lat"])
        lon = float(first["lon"])
        display_name = str(first["display_name"])
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(f"Geocoding failed: malformed result ({e})") from e

    state = infer_state(display_name, reference)
    logger.info(f"[Geocoder] '{query}' → {display_name} ({lat:.4f}, {lon:.4f}) state={state}")
    return ResolvedLocation(latitude=lat, longitude=lon, display_name=display_name, state=state)


def infer_state(display_name: str, reference: ReferenceData = DEFAULT_REFERENCE) -> str:
    """Known city anywhere in the name first, then comma segments against state names."""
    lowered = display_name.lower()
    for city, state in reference.city_to_state.items():
        if city.lower() in lowered:
            return state

    # Empty segments would substring-match every state
    parts = [p.strip() for p in display_name.split(",") if p.strip()]
    for part in parts:
        if part in reference.states:
            return _normalise_state(part)
        part_lower = part.lower()
        for state in reference.states:
            state_lower = state.lower()
            if state_lower in part_lower or part_lower in state_lower:
                return _normalise_state(state)

    return UNKNOWN_STATE


def _normalise_state(state: str) -> str:
    return "Delhi" if state == NCT_DELHI else state
