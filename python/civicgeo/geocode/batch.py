"""Sequential, rate-limited forward geocoding of many locations."""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from civicgeo.config import settings
from civicgeo.geocode.client import GeocodeClient, get_default_client
from civicgeo.geocode.models import Coordinates

logger = logging.getLogger(__name__)


async def batch_geocode(
    locations: Iterable[str],
    delay_ms: int | float | None = None,
    *,
    client: GeocodeClient | None = None,
) -> dict[str, Coordinates]:
    """Forward-geocode *locations* one at a time, pausing between requests.

    Items are resolved strictly in order and never overlap: item ``i + 1`` is
    not started until item ``i`` has resolved and the delay has elapsed. There
    is no pause after the last item. A failed item is left out of the result;
    it never stops the batch.

    Args:
        locations: Location strings, resolved in iteration order.
        delay_ms: Pause between items in milliseconds. Defaults to
            ``settings.geocode_batch_delay_ms``.
        client: Resolver to use. Defaults to the shared client.

    Returns:
        Mapping of each successfully resolved input string (as given) to its
        coordinates.

    Raises:
        ValueError: If *delay_ms* is negative.
    """
    if delay_ms is None:
        delay_ms = settings.geocode_batch_delay_ms
    if delay_ms < 0:
        raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
    resolver = client if client is not None else get_default_client()

    items = list(locations)
    results: dict[str, Coordinates] = {}

    for index, location in enumerate(items):
        coords = await resolver.geocode_location(location)
        if coords is not None:
            results[location] = coords
        if index < len(items) - 1:
            await asyncio.sleep(delay_ms / 1000)

    logger.info("[geocode] batch resolved %d/%d locations", len(results), len(items))
    return results
