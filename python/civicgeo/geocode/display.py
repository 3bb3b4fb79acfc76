"""Display-side adapter that turns a raw report location into display text.

Text addresses are shown as given. Coordinate strings are reverse-geocoded in
the background while a loading label is shown; if resolution fails the raw
string is shown unchanged.

Resolved addresses are kept in a display-level cache keyed by the raw location
string and shared by every ``LocationDisplay`` (unless one is injected), so a
location that has been rendered once resolves synchronously on later renders.
The client's reverse cache sits underneath as the second layer.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from civicgeo.geocode.cache import GeocodeCache, normalize_text_key
from civicgeo.geocode.client import reverse_geocode_location
from civicgeo.geocode.coordinates import is_coordinate_string, parse_coordinates
from civicgeo.geocode.models import Coordinates

logger = logging.getLogger(__name__)

ReverseResolver = Callable[[float, float], Awaitable[Optional[str]]]

shared_address_cache: GeocodeCache[str] = GeocodeCache(normalize_text_key)


class DisplayState(str, Enum):
    """Where a ``LocationDisplay`` is in resolving its current input."""

    IDLE = "idle"
    VERBATIM = "verbatim"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FALLBACK = "fallback"


class LocationDisplay:
    """Holds the text to render for one location field.

    Each resolution task carries the input string it was started for. When it
    completes after the input has changed, its result is cached but not
    applied.
    """

    def __init__(
        self,
        resolver: ReverseResolver = reverse_geocode_location,
        cache: GeocodeCache[str] | None = None,
        loading_text: str = "Loading...",
    ) -> None:
        self._resolver = resolver
        self._cache = cache if cache is not None else shared_address_cache
        self._loading_text = loading_text
        self._location = ""
        self._display = ""
        self._state = DisplayState.IDLE
        self._task: asyncio.Task | None = None

    @property
    def location(self) -> str:
        return self._location

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is DisplayState.RESOLVING

    @property
    def text(self) -> str:
        """The string to render right now."""
        if self.is_loading:
            return self._loading_text
        return self._display

    def set_location(self, location: str) -> asyncio.Task | None:
        """Show *location*, starting reverse resolution if it is a coordinate string.

        Must be called from inside a running event loop when *location* needs
        resolution.

        Returns:
            The background resolution task, or None when the display text was
            settled synchronously.
        """
        if (
            location == self._location
            and self._state is DisplayState.RESOLVING
            and self._task is not None
        ):
            return self._task

        self._location = location
        self._state = DisplayState.IDLE
        self._task = None

        if not is_coordinate_string(location):
            self._settle(DisplayState.VERBATIM, location)
            return None

        cached = self._cache.get(location)
        if cached is not None:
            self._settle(DisplayState.RESOLVED, cached)
            return None

        coords = parse_coordinates(location)
        if coords is None:
            self._settle(DisplayState.VERBATIM, location)
            return None

        self._state = DisplayState.RESOLVING
        self._display = location
        self._task = asyncio.get_running_loop().create_task(self._resolve(location, coords))
        return self._task

    def _settle(self, state: DisplayState, text: str) -> None:
        self._state = state
        self._display = text

    async def _resolve(self, token: str, coords: Coordinates) -> None:
        try:
            address = await self._resolver(coords.lat, coords.lng)
        except Exception as exc:
            logger.warning("[display] reverse geocoding failed for %r: %s", token, exc)
            address = None

        if address:
            self._cache.set(token, address)

        if token != self._location:
            logger.debug("[display] discarding stale result for %r", token)
            return

        if address:
            self._settle(DisplayState.RESOLVED, address)
        else:
            self._settle(DisplayState.FALLBACK, token)
