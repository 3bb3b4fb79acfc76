"""GeocodeClient: forward and reverse resolution through the backend proxy.

Wraps an ``httpx.AsyncClient`` pointed at the backend geocoding proxy and owns
the two resolution caches (address text -> coordinates, coordinate pair ->
address). Both public resolvers are total: every failure is logged and turned
into ``None`` so that batch and display code can apply one fallback path.

Usage::

    from civicgeo.config import Settings
    from civicgeo.geocode.client import GeocodeClient

    async with GeocodeClient(Settings()) as client:
        coords = await client.geocode_location("HITEC City, Hyderabad")
        address = await client.reverse_geocode_location(17.4435, 78.3772)

Failure policy
--------------
- Empty address input and non-numeric or out-of-range reverse coordinates
  return None without a request.
- Transport errors and non-2xx responses are logged as warnings, not retried.
- Bodies that are not JSON, empty result arrays and candidates with missing or
  non-finite coordinates are logged as warnings.
- Nothing is cached on failure, so a later call tries the network again.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from civicgeo.config import Settings, settings as default_settings
from civicgeo.geocode.cache import GeocodeCache, normalize_address_key, normalize_text_key
from civicgeo.geocode.coordinates import COORDINATE_PATTERN, format_coordinates, parse_coordinates
from civicgeo.geocode.models import Coordinates, ForwardCandidate, ReverseResult, in_range

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GeocodeError(Exception):
    """Base class for failures inside a single proxy lookup."""


class GeocodeTransportError(GeocodeError):
    """Network failure or non-2xx status from the proxy."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class GeocodeResponseError(GeocodeError):
    """Proxy answered 2xx but the body was not the expected shape."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GeocodeClient:
    """Async resolver for location strings, backed by the geocoding proxy.

    Intended to be used as an async context manager so that the underlying
    httpx.AsyncClient is always properly closed::

        async with GeocodeClient(settings) as client:
            coords = await client.geocode_location("Charminar")

    Caches may be injected to share them between clients; by default each
    client owns a fresh pair.
    """

    def __init__(
        self,
        settings: Settings = default_settings,
        *,
        forward_cache: GeocodeCache[Coordinates] | None = None,
        reverse_cache: GeocodeCache[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=settings.geocode_base_url,
            headers={"Accept": "application/json"},
            transport=transport,
        )
        self._forward_path = settings.geocode_path
        self._reverse_path = settings.reverse_geocode_path
        self.forward_cache: GeocodeCache[Coordinates] = (
            forward_cache if forward_cache is not None else GeocodeCache(normalize_address_key)
        )
        self.reverse_cache: GeocodeCache[str] = (
            reverse_cache if reverse_cache is not None else GeocodeCache(normalize_text_key)
        )

    async def __aenter__(self) -> "GeocodeClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def clear_cache(self) -> None:
        """Drop every forward and reverse cache entry."""
        self.forward_cache.clear()
        self.reverse_cache.clear()

    # -----------------------------------------------------------------------
    # Internal transport layer
    # -----------------------------------------------------------------------

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        """GET *path* with *params* and return the decoded JSON body.

        Raises:
            GeocodeTransportError: The request failed or returned non-2xx.
            GeocodeResponseError: The body could not be decoded as JSON.
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise GeocodeTransportError(f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise GeocodeTransportError(
                f"HTTP {response.status_code}", status_code=response.status_code
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GeocodeResponseError("response body is not valid JSON") from exc

    async def _fetch_forward(self, query: str) -> Coordinates | None:
        payload = await self._get_json(self._forward_path, {"q": query})
        if not isinstance(payload, list):
            raise GeocodeResponseError(
                f"expected a JSON array, got {type(payload).__name__}"
            )
        if not payload:
            return None
        try:
            candidate = ForwardCandidate.model_validate(payload[0])
        except ValidationError as exc:
            raise GeocodeResponseError(
                f"invalid candidate: {exc.error_count()} validation error(s)"
            ) from exc
        return candidate.coordinates()

    async def _fetch_reverse(self, lat: float, lng: float) -> str:
        payload = await self._get_json(self._reverse_path, {"lat": lat, "lon": lng})
        if not isinstance(payload, dict):
            raise GeocodeResponseError(
                f"expected a JSON object, got {type(payload).__name__}"
            )
        try:
            return ReverseResult.model_validate(payload).display_name
        except ValidationError as exc:
            raise GeocodeResponseError(
                f"invalid reverse result: {exc.error_count()} validation error(s)"
            ) from exc

    # -----------------------------------------------------------------------
    # Public resolvers
    # -----------------------------------------------------------------------

    async def geocode_location(self, location: str) -> Coordinates | None:
        """Resolve an address (or an inline ``"lat, lng"`` string) to coordinates.

        Lookup order: cache, inline coordinate parse, proxy request. A
        successful result is cached under the trimmed input.

        Args:
            location: Free-text address such as ``"HITEC City, Hyderabad"``, or
                a coordinate string such as ``"17.4, 78.4"``.

        Returns:
            ``Coordinates(lat, lng)``, or None when the location cannot be
            resolved for any reason. Never raises.
        """
        query = location.strip() if isinstance(location, str) else ""
        if not query:
            return None

        cached = self.forward_cache.get(query)
        if cached is not None:
            logger.debug("[geocode] cache hit for %r", query)
            return cached

        if COORDINATE_PATTERN.match(query):
            coords = parse_coordinates(query)
            if coords is not None:
                self.forward_cache.set(query, coords)
                return coords

        try:
            coords = await self._fetch_forward(query)
        except GeocodeTransportError as exc:
            logger.warning("[geocode] request failed for %r: %s", query, exc)
            return None
        except GeocodeResponseError as exc:
            logger.warning("[geocode] malformed response for %r: %s", query, exc)
            return None
        except Exception:
            logger.exception("[geocode] unexpected error for %r", query)
            return None

        if coords is None:
            logger.warning("[geocode] no results for %r", query)
            return None
        self.forward_cache.set(query, coords)
        return coords

    async def reverse_geocode_location(self, lat: float, lng: float) -> str | None:
        """Resolve a coordinate pair to a display address.

        The reverse cache is keyed by ``format_coordinates(lat, lng)``, so
        pairs equal to six decimal places share one entry.

        Returns:
            The proxy's ``display_name``, or None on any failure. Never raises.
        """
        try:
            lat, lng = float(lat), float(lng)
        except (TypeError, ValueError):
            logger.warning("[reverse-geocode] non-numeric coordinates %r, %r", lat, lng)
            return None
        if not (math.isfinite(lat) and math.isfinite(lng) and in_range(lat, lng)):
            logger.warning("[reverse-geocode] coordinates out of range: %s, %s", lat, lng)
            return None

        key = format_coordinates(lat, lng)
        cached = self.reverse_cache.get(key)
        if cached is not None:
            logger.debug("[reverse-geocode] cache hit for %s", key)
            return cached

        try:
            address = await self._fetch_reverse(lat, lng)
        except GeocodeTransportError as exc:
            logger.warning("[reverse-geocode] request failed for %s: %s", key, exc)
            return None
        except GeocodeResponseError as exc:
            logger.warning("[reverse-geocode] malformed response for %s: %s", key, exc)
            return None
        except Exception:
            logger.exception("[reverse-geocode] unexpected error for %s", key)
            return None

        self.reverse_cache.set(key, address)
        return address


# ---------------------------------------------------------------------------
# Process-wide default client
# ---------------------------------------------------------------------------

_default_client: GeocodeClient | None = None


def get_default_client() -> GeocodeClient:
    """Return the shared client, creating it from ``civicgeo.config.settings``."""
    global _default_client
    if _default_client is None:
        _default_client = GeocodeClient(default_settings)
    return _default_client


def set_default_client(client: GeocodeClient | None) -> None:
    """Replace the shared client; None makes the next call build a fresh one."""
    global _default_client
    _default_client = client


async def geocode_location(location: str) -> Coordinates | None:
    """Forward-resolve *location* with the shared client."""
    return await get_default_client().geocode_location(location)


async def reverse_geocode_location(lat: float, lng: float) -> str | None:
    """Reverse-resolve *lat*/*lng* with the shared client."""
    return await get_default_client().reverse_geocode_location(lat, lng)


def clear_geocode_cache() -> None:
    """Clear the shared client's caches."""
    get_default_client().clear_cache()
