"""Resolve report locations from the command line.

Usage examples:
    # Forward: addresses -> coordinates, paced 400 ms apart
    python geocode_cli.py "HITEC City, Hyderabad" "Charminar, Hyderabad"

    # Faster pacing against a local proxy
    GEOCODE_PROXY_URL=http://localhost:5000 python geocode_cli.py --delay-ms 100 "Gachibowli"

    # Reverse: coordinate strings -> display addresses
    python geocode_cli.py --reverse "17.4435, 78.3772"
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from civicgeo.config import settings
from civicgeo.geocode import (
    LocationDisplay,
    batch_geocode,
    get_default_client,
    set_default_client,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("geocode")

UNRESOLVED = "-"


async def run_forward(locations: list[str], delay_ms: int) -> list[str]:
    results = await batch_geocode(locations, delay_ms)
    lines = []
    for location in locations:
        coords = results.get(location)
        value = f"{coords.lat},{coords.lng}" if coords is not None else UNRESOLVED
        lines.append(f"{location}\t{value}")
    return lines


async def run_reverse(locations: list[str]) -> list[str]:
    lines = []
    for location in locations:
        display = LocationDisplay()
        task = display.set_location(location)
        if task is not None:
            await task
        lines.append(f"{location}\t{display.text}")
    return lines


async def _main(args: argparse.Namespace) -> None:
    try:
        if args.reverse:
            lines = await run_reverse(args.locations)
        else:
            lines = await run_forward(args.locations, args.delay_ms)
    finally:
        await get_default_client().aclose()
        set_default_client(None)
    for line in lines:
        print(line)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Resolve report locations via the geocoding proxy")
    parser.add_argument("locations", nargs="+", help="Addresses, or coordinate strings with --reverse")
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=settings.geocode_batch_delay_ms,
        help="Pause between forward lookups (default: %(default)s)",
    )
    parser.add_argument("--reverse", action="store_true", help="Reverse-geocode coordinate strings")
    args = parser.parse_args(argv)
    if args.delay_ms < 0:
        parser.error("--delay-ms must be >= 0")

    log.info("Resolving %d location(s) via %s", len(args.locations), settings.geocode_base_url)
    asyncio.run(_main(args))


if __name__ == "__main__":
    main()
