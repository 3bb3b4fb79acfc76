"""Shared test fixtures for geocoding tests."""
import pytest
import respx

from civicgeo.config import Settings
from civicgeo.geocode.client import GeocodeClient, set_default_client

BASE_URL = "http://geocode-proxy.test"

TEST_SETTINGS = Settings(
    geocode_base_url=BASE_URL,
    geocode_path="/api/geocode",
    reverse_geocode_path="/api/reverse-geocode",
    geocode_batch_delay_ms=0,
)


@pytest.fixture
def mock_proxy():
    """respx mock transport for the geocoding proxy."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def default_client():
    """Install a fresh shared client pointed at the test proxy."""
    client = GeocodeClient(TEST_SETTINGS)
    set_default_client(client)
    yield client
    set_default_client(None)


@pytest.fixture
def hitec_city_results():
    """Nominatim-style search result proxied by /api/geocode."""
    return [
        {
            "place_id": 123456,
            "lat": "17.4435",
            "lon": "78.3772",
            "display_name": "HITEC City, Madhapur, Hyderabad, Telangana, India",
            "importance": 0.61,
        },
        {
            "place_id": 654321,
            "lat": "17.4500",
            "lon": "78.3800",
            "display_name": "HITEC City Metro Station, Hyderabad, India",
        },
    ]


@pytest.fixture
def charminar_reverse_result():
    """Nominatim-style reverse result proxied by /api/reverse-geocode."""
    return {
        "place_id": 98765,
        "lat": "17.3616",
        "lon": "78.4747",
        "display_name": "Charminar, Ghansi Bazaar, Hyderabad, Telangana, India",
        "address": {"city": "Hyderabad", "country": "India"},
    }
