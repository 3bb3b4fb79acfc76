"""Location resolution: coordinate detection, forward/reverse geocoding, caching."""

from .batch import batch_geocode
from .cache import GeocodeCache, normalize_address_key, normalize_text_key
from .client import (
    GeocodeClient,
    GeocodeError,
    GeocodeResponseError,
    GeocodeTransportError,
    clear_geocode_cache,
    geocode_location,
    get_default_client,
    reverse_geocode_location,
    set_default_client,
)
from .coordinates import (
    COORDINATE_PATTERN,
    format_coordinates,
    is_coordinate_string,
    parse_coordinates,
)
from .display import DisplayState, LocationDisplay
from .models import Coordinates

__all__ = [
    "COORDINATE_PATTERN",
    "Coordinates",
    "DisplayState",
    "GeocodeCache",
    "GeocodeClient",
    "GeocodeError",
    "GeocodeResponseError",
    "GeocodeTransportError",
    "LocationDisplay",
    "batch_geocode",
    "clear_geocode_cache",
    "format_coordinates",
    "geocode_location",
    "get_default_client",
    "is_coordinate_string",
    "normalize_address_key",
    "normalize_text_key",
    "parse_coordinates",
    "reverse_geocode_location",
    "set_default_client",
]
