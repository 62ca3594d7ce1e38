#!/usr/bin/env python3
"""CLI entry point for quoting store delivery fees."""

import argparse
import json
import logging
import sys

import requests

from store_delivery.base_repository import StoreRepository
from store_delivery.errors import GeocodingError
from store_delivery.fee_engine import calculate_delivery_fee, check_delivery_zone, quote_delivery
from store_delivery.money import format_currency


def _print_fee(store, result):
    """Print a single-store fee report to stdout."""
    print(f"\n{'=' * 70}")
    print(f"  DELIVERY QUOTE: {store.name} ({store.id})")
    print(f"{'=' * 70}\n")
    if store.full_address:
        print(f"  Store:     {store.full_address}")
    if result.distance_km is not None:
        print(f"  Distance:  {result.distance_km:.2f} km")
    if result.is_delivery_available:
        print(f"  Fee:       {format_currency(result.fee)}")
    else:
        print("  Fee:       Not available")
    if result.message:
        print(f"  Note:      {result.message}")
    print()


def _print_quotes(quotes, zone):
    """Print ranked quotes and the nearest-store zone check."""
    print(f"\n{'=' * 70}")
    print("  DELIVERY QUOTES")
    print(f"  {len(quotes)} store(s) can deliver to this location")
    print(f"{'=' * 70}\n")

    for i, quote in enumerate(quotes, 1):
        print(f"  {i}. {quote.store.name} ({quote.store.id})")
        print(f"    Fee:       {format_currency(quote.result.fee)}")
        print(f"    Distance:  {quote.result.distance_km:.2f} km")
        if quote.result.message:
            print(f"    Note:      {quote.result.message}")
        print()

    if zone.nearest_store is None:
        print("  No store currently offers delivery.")
    else:
        status = "inside" if zone.within_zone else "outside"
        print(
            f"  Nearest store: {zone.nearest_store.name} "
            f"({zone.distance_km:.2f} km, {status} its delivery area)"
        )
    print()


def _build_repository(args) -> StoreRepository:
    """Instantiate the store source chosen on the command line.

    Args:
        args: Parsed argparse namespace.

    Returns:
        A StoreRepository backed by a JSON file or the M-Mart+ API.
    """
    if args.stores_file:
        from store_delivery.memory_repository import InMemoryStoreRepository
        return InMemoryStoreRepository.from_json_file(args.stores_file)

    from store_delivery.api_client import StoreLocationsClient
    return StoreLocationsClient(base_url=args.api_url, api_token=args.api_token)


def _resolve_location(args, repository) -> tuple[float, float]:
    if args.address:
        geocode = getattr(repository, "geocode", None)
        if geocode is None:
            raise ValueError("--address requires the M-Mart+ API (use --api-url).")
        coord = geocode(args.address)
        return coord.lat, coord.lng

    if args.lat is None or args.lng is None:
        raise ValueError("Provide both --lat and --lng, or --address.")
    return args.lat, args.lng


def _run(args):
    repository = _build_repository(args)
    lat, lng = _resolve_location(args, repository)

    if args.all_stores:
        stores = repository.list_stores()
        quotes = quote_delivery(stores, args.order_value, lat, lng)
        zone = check_delivery_zone(stores, lat, lng)
        if args.json:
            nearest = zone.nearest_store
            print(json.dumps({
                "quotes": [
                    {"storeId": q.store.id, "storeName": q.store.name, **q.result.to_dict()}
                    for q in quotes
                ],
                "zone": {
                    "withinZone": zone.within_zone,
                    "nearestStoreId": nearest.id if nearest else None,
                    "distanceKm": (
                        round(zone.distance_km, 3) if zone.distance_km is not None else None
                    ),
                },
            }, indent=2))
        else:
            _print_quotes(quotes, zone)
        return

    store = repository.get_store(args.store_id)
    if store is None:
        raise ValueError(f"Unknown store: {args.store_id}")

    result = calculate_delivery_fee(store, args.order_value, lat, lng)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_fee(store, result)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Quote the delivery fee from an M-Mart+ store to a customer location.",
    )

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--stores-file",
        metavar="FILE",
        help="JSON file with store records (default: the M-Mart+ API).",
    )
    source_group.add_argument(
        "--api-url",
        help="M-Mart+ API base URL (overrides MMART_API_URL env var).",
    )
    parser.add_argument(
        "--api-token",
        help="API bearer token (overrides MMART_API_TOKEN env var).",
    )

    store_group = parser.add_mutually_exclusive_group(required=True)
    store_group.add_argument("--store-id", help="Store to quote from.")
    store_group.add_argument(
        "--all-stores",
        action="store_true",
        help="Quote every store and rank the results.",
    )

    # Customer location.
    parser.add_argument("--lat", type=float, help="Customer latitude.")
    parser.add_argument("--lng", type=float, help="Customer longitude.")
    parser.add_argument(
        "--address",
        help="Customer address, geocoded through the M-Mart+ API.",
    )

    parser.add_argument(
        "--order-value",
        type=int,
        required=True,
        help="Order subtotal in minor currency units (e.g. kobo, cents).",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a report.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        _run(args)
    except (OSError, ValueError, GeocodingError, requests.RequestException) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
