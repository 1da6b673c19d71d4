#!/usr/bin/env python3
"""Sample search harness for end-to-end validation.

Runs the four gateway operations (search, event detail, venue, suggest) and
prints the client-facing JSON, without starting the HTTP server. Two modes:

1. Fixture mode (default): serves the recorded payloads in tests/fixtures
2. Real endpoint mode: calls the live Discovery API (needs TM_API_KEY)

Usage:
    # Run with fixtures (no network required)
    python scripts/run_sample_search.py --keyword jazz

    # Run against the live Discovery API
    SAMPLE_REAL_RUN=1 python scripts/run_sample_search.py --keyword "taylor swift" --category Music
"""

import argparse
import json
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from gateway.config.exceptions import ConfigurationError
from gateway.config.loader import load_config
from gateway.discovery import DiscoveryClient, DiscoveryError, DiscoveryService
from gateway.logging.config import configure_logging
from tests.helpers import TEST_API_KEY, FixtureFetcher, load_fixture


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def fixture_fetcher() -> FixtureFetcher:
    return FixtureFetcher(
        {
            "events.json": load_fixture("events_search_response.json"),
            "events/": load_fixture("event_detail_response.json"),
            "venues.json": load_fixture("venue_search_response.json"),
            "suggest": load_fixture("suggest_response.json"),
        }
    )


def main():
    """Main entry point for the sample search harness."""
    parser = argparse.ArgumentParser(
        description="Run sample gateway operations for end-to-end validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to configuration file")
    parser.add_argument("--keyword", default="jazz", help="Search keyword (default: jazz)")
    parser.add_argument("--distance", default="10", help="Search radius in miles (default: 10)")
    parser.add_argument("--category", default="Default", help="Category label (default: Default)")
    parser.add_argument("--lat", default="34.0522", help="Latitude (default: Los Angeles)")
    parser.add_argument("--lng", default="-118.2437", help="Longitude (default: Los Angeles)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )

    args = parser.parse_args()

    load_dotenv()

    use_real_endpoints = os.environ.get("SAMPLE_REAL_RUN", "0") == "1"

    print_header("Event Gateway - Sample Search Harness")

    try:
        app_config, env_config = load_config(args.config)
    except ConfigurationError as e:
        print(f"\n❌ Configuration Error: {e}")
        return 1

    configure_logging(level=args.log_level, format_type=app_config.logging.format, environment="validation")

    if use_real_endpoints:
        print(f"⚠️  REAL ENDPOINT MODE: requests go to {env_config.base_url}")
        if not env_config.api_key:
            print("\n❌ Error: TM_API_KEY is not set")
            return 1
        fetcher = DiscoveryClient(
            env_config.base_url,
            timeout=app_config.upstream.timeout,
            user_agent=app_config.upstream.user_agent,
        )
        service = DiscoveryService(fetcher, api_key=env_config.api_key)
    else:
        print("Using fixture data (no network requests will be made)")
        service = DiscoveryService(fixture_fetcher(), api_key=TEST_API_KEY)

    try:
        print_header(f"Search: {args.keyword!r} within {args.distance} miles ({args.category})")
        rows = service.search(args.keyword, args.distance, args.category, args.lat, args.lng)
        print_json([row.to_client() for row in rows])

        if not rows:
            print("\nNo events found; skipping detail and venue lookups.")
        else:
            print_header(f"Event detail: {rows[0].id}")
            detail = service.get_event_detail(rows[0].id)
            print_json(detail.to_client())

            venue_name = detail.venue or rows[0].venue
            if venue_name:
                print_header(f"Venue: {venue_name}")
                venue = service.get_venue(venue_name)
                print_json(venue.to_client() if venue is not None else None)

        print_header(f"Suggest: {args.keyword!r}")
        print_json(service.suggest(args.keyword))

    except DiscoveryError as e:
        print(f"\n❌ {type(e).__name__}: {e}")
        return 1
    finally:
        if use_real_endpoints:
            fetcher.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
