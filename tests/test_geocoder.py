import httpx
import pytest

from errors import NotFoundError, TransportError
from geocoder import infer_state, resolve
from reference_data import ReferenceData

from conftest import JAIPUR_DISPLAY, Upstream, nominatim_payload

NOMINATIM_HOST = "nominatim.openstreetmap.org"


@pytest.mark.parametrize("display_name, expected", [
    ("Mumbai, Mumbai Suburban, Maharashtra, India", "Maharashtra"),
    ("BENGALURU, Bangalore North, Karnataka, India", "Karnataka"),
    (JAIPUR_DISPLAY, "Rajasthan"),
    ("Kota, Kota District, Rajasthan, India", "Rajasthan"),
    ("Some Village, Tamil Nadu State, India", "Tamil Nadu"),
    ("Connaught Place, National Capital Territory of Delhi, India", "Delhi"),
    ("Springfield, Illinois, United States", "Unknown"),
])
def test_infer_state(display_name, expected):
    assert infer_state(display_name) == expected


def test_infer_state_normalises_nct_segment():
    reference = ReferenceData(city_to_state={})
    assert infer_state("Chanakyapuri, National Capital Territory of Delhi, India", reference) == "Delhi"


def test_infer_state_ignores_empty_segments():
    assert infer_state("Springfield, , Illinois") == "Unknown"


async def test_resolve_returns_first_hit(settings):
    upstream = Upstream()
    location = await resolve("Jaipur", client=upstream.client(), settings=settings)

    assert location.state == "Rajasthan"
    assert location.latitude == pytest.approx(26.9154576)
    assert location.longitude == pytest.approx(75.8189817)
    assert location.display_name == JAIPUR_DISPLAY

    request = upstream.requests_to(NOMINATIM_HOST)[0]
    assert request.url.params["q"] == "Jaipur, India"
    assert request.url.params["format"] == "json"
    assert request.url.params["limit"] == "1"
    assert request.headers["user-agent"] == settings.geocoder_user_agent


async def test_resolve_unknown_state_still_succeeds(settings):
    upstream = Upstream(geocode=nominatim_payload("Springfield, Illinois, United States", "39.8", "-89.6"))
    location = await resolve("Springfield", client=upstream.client(), settings=settings)
    assert location.state == "Unknown"


async def test_resolve_no_results_raises_not_found(settings):
    upstream = Upstream(geocode=[])
    with pytest.raises(NotFoundError):
        await resolve("Atlantis", client=upstream.client(), settings=settings)


@pytest.mark.parametrize("response", [
    503,
    httpx.ConnectTimeout("timed out"),
    {"error": "not a list"},
    [{"lat": "north", "lon": "75.8", "display_name": "Jaipur"}],
    [{"display_name": "Jaipur"}],
])
async def test_resolve_transport_failures(settings, response):
    upstream = Upstream(geocode=response)
    with pytest.raises(TransportError):
        await resolve("Jaipur", client=upstream.client(), settings=settings)


async def test_resolve_rejects_blank_query(settings):
    with pytest.raises(ValueError):
        await resolve("   ", settings=settings)
