"""Command line entrypoint for the Untappd client."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Sequence

from pydantic import ValidationError

from .client import UntappdClient
from .config import Settings, get_settings
from .errors import UntappdError

logger = logging.getLogger("untappd_client")

Handler = Callable[[UntappdClient, argparse.Namespace], dict[str, Any]]


def build_client(settings: Settings) -> UntappdClient:
    """Create the client used by the command line."""
    return UntappdClient.from_settings(settings)


def _add_paging(parser: argparse.ArgumentParser, *, since: bool = True) -> None:
    if since:
        parser.add_argument("--since", type=int, help="numeric ID of the latest checkin")
    parser.add_argument("--offset", type=int, help="offset within the dataset")


def _add_location(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", dest="latitude", type=float)
    parser.add_argument("--lng", dest="longitude", type=float)


COMMANDS: dict[str, Handler] = {
    "my-feed": lambda c, a: c.my_feed(a.since, a.offset),
    "user-info": lambda c, a: c.user_info(a.user),
    "user-feed": lambda c, a: c.user_feed(a.user, a.since, a.offset),
    "user-distinct-beers": lambda c, a: c.user_distinct_beers(a.user, a.offset),
    "user-friends": lambda c, a: c.user_friends(a.user, a.offset),
    "user-wishlist": lambda c, a: c.user_wishlist(a.user, a.offset),
    "user-badges": lambda c, a: c.user_badges(a.user, a.sort),
    "beer-info": lambda c, a: c.beer_info(a.beer_id),
    "beer-search": lambda c, a: c.beer_search(a.query),
    "beer-checkins": lambda c, a: c.beer_checkins(a.beer_id, a.since, a.offset),
    "venue-info": lambda c, a: c.venue_info(a.venue_id),
    "venue-checkins": lambda c, a: c.venue_checkins(a.venue_id, a.since, a.offset),
    "brewery-checkins": lambda c, a: c.brewery_checkins(a.brewery_id, a.since, a.offset),
    "public-feed": lambda c, a: c.public_feed(a.since, a.offset, a.longitude, a.latitude),
    "trending": lambda c, a: c.trending(a.type, a.limit, a.age, a.latitude, a.longitude),
    "checkin-details": lambda c, a: c.checkin_details(a.checkin_id),
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per read endpoint."""
    parser = argparse.ArgumentParser(prog="untappd", description="Query the Untappd v3 API.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    _add_paging(sub.add_parser("my-feed", help="authenticated user's friend feed"))

    for name in ("user-info", "user-feed", "user-distinct-beers", "user-friends", "user-wishlist", "user-badges"):
        cmd = sub.add_parser(name)
        cmd.add_argument("--user", help="Untappd username (defaults to the authenticated user)")
        if name == "user-feed":
            _add_paging(cmd)
        elif name == "user-badges":
            # Validated by the client.
            cmd.add_argument("--sort", default="all", help="all, beer, venue or special")
        elif name != "user-info":
            _add_paging(cmd, since=False)

    sub.add_parser("beer-info").add_argument("beer_id")
    sub.add_parser("beer-search").add_argument("query")
    for name, id_arg in (
        ("beer-checkins", "beer_id"),
        ("venue-checkins", "venue_id"),
        ("brewery-checkins", "brewery_id"),
    ):
        cmd = sub.add_parser(name)
        cmd.add_argument(id_arg)
        _add_paging(cmd)
    sub.add_parser("venue-info").add_argument("venue_id")
    sub.add_parser("checkin-details").add_argument("checkin_id")

    pub = sub.add_parser("public-feed")
    _add_paging(pub)
    _add_location(pub)

    trending = sub.add_parser("trending")
    trending.add_argument("--type", default="all", help="all, macro, micro or local")
    trending.add_argument("--limit", type=int, default=10)
    trending.add_argument("--age", default="daily", help="daily, weekly or monthly")
    _add_location(trending)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a single API call and print the response envelope as JSON."""
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as exc:
        logging.basicConfig()
        logger.error("Invalid configuration: %s", exc)
        return 2
    level = "DEBUG" if args.verbose else settings.log_level
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not settings.untappd_api_key:
        logger.error("UNTAPPD_API_KEY is not configured")
        return 2

    with build_client(settings) as client:
        try:
            envelope = COMMANDS[args.command](client, args)
        except UntappdError as exc:
            logger.error("%s failed: %s", args.command, exc)
            logger.debug("Last raw response: %s", client.last_raw_response)
            return 1

    json.dump(envelope, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
