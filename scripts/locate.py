#!/usr/bin/env python3
"""Live location resolution tool.

Exercises the same flows as the picker widget against the public
providers, printing each ``ResolvedLocation`` as JSON.

Examples::

    python scripts/locate.py search "Burj Khalifa"
    python scripts/locate.py search "Burj Khalifa" --pick 1
    python scripts/locate.py reverse 25.1972 55.2744
    python scripts/locate.py gps --position 25.2,55.3

Configuration is read from ``IFTARLOC_*`` environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from iftarloc import (
    FixedPositionSource,
    GeocodeClient,
    LocationPicker,
    LocatorConfig,
    LocatorError,
    ResolvedLocation,
)


def _parse_position(value: str) -> tuple[float, float]:
    try:
        lat_text, lng_text = value.split(",", 1)
        return float(lat_text), float(lng_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected LAT,LNG, got {value!r}") from exc


def _print_location(location: ResolvedLocation | None) -> None:
    if location is None:
        print("null")
        return
    print(json.dumps(location.model_dump(), ensure_ascii=False, indent=2))


async def _cmd_search(client: GeocodeClient, args: argparse.Namespace) -> int:
    picker = LocationPicker(client, on_change=lambda _address: None)
    async with picker:
        picker.set_search_query(args.query)
        await picker.wait_idle()

        if not picker.search_results:
            print("No results.", file=sys.stderr)
            return 1

        if args.pick is None:
            for index, feature in enumerate(picker.search_results, start=1):
                coords = feature.coordinates
                print(f"{index}. {feature.label}  {coords}")
            return 0

        if not 1 <= args.pick <= len(picker.search_results):
            print(f"--pick must be between 1 and {len(picker.search_results)}", file=sys.stderr)
            return 2
        _print_location(picker.select_result(picker.search_results[args.pick - 1]))
    return 0


async def _cmd_reverse(client: GeocodeClient, args: argparse.Namespace) -> int:
    picker = LocationPicker(client, on_change=lambda _address: None)
    async with picker:
        location = await picker.drop_pin(args.lat, args.lng)
    _print_location(location)
    return 0 if location is not None else 1


async def _cmd_gps(client: GeocodeClient, _args: argparse.Namespace) -> int:
    picker = LocationPicker(client, on_change=lambda _address: None)
    async with picker:
        picker.select_tab("gps")
        location = await picker.fetch_gps_location()
        if picker.error:
            print(picker.error, file=sys.stderr)
            return 1
    _print_location(location)
    return 0


async def run() -> int:
    parser = argparse.ArgumentParser(description="Resolve places through Photon and Nominatim.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Forward-search a place name")
    search.add_argument("query")
    search.add_argument("--pick", type=int, help="Confirm the N-th result (1-based)")

    reverse = sub.add_parser("reverse", help="Resolve a dropped map pin")
    reverse.add_argument("lat", type=float)
    reverse.add_argument("lng", type=float)

    gps = sub.add_parser("gps", help="Resolve a device position")
    gps.add_argument(
        "--position",
        type=_parse_position,
        help="Report this LAT,LNG as the device position (default: unavailable)",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = LocatorConfig.from_env()
    position_source = None
    if args.command == "gps":
        position_source = FixedPositionSource(*args.position) if args.position else FixedPositionSource()

    handlers = {"search": _cmd_search, "reverse": _cmd_reverse, "gps": _cmd_gps}
    async with GeocodeClient(config, position_source=position_source) as client:
        return await handlers[args.command](client, args)


def main() -> None:
    try:
        sys.exit(asyncio.run(run()))
    except LocatorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
