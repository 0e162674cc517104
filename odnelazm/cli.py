"""Command line interface for browsing hansard sittings."""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import json
import logging
from collections.abc import Sequence
from typing import Any

from odnelazm.errors import InvalidHouseError, ScraperError
from odnelazm.scraper import WebScraper
from odnelazm.types import House
from odnelazm.utils import ListingFilter, ListingStats

log = logging.getLogger("odnelazm")

_LOG_LEVELS = {
    "off": logging.CRITICAL + 1,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}

_U16_MAX = 65535


def _positive_count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text}") from None
    if not 1 <= value <= _U16_MAX:
        raise argparse.ArgumentTypeError(f"{value} is not in 1..={_U16_MAX}")
    return value


def _date(text: str) -> dt.date:
    try:
        return dt.datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _house(text: str) -> House:
    try:
        return House.from_str(text)
    except InvalidHouseError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _add_output(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        dest="format",
        choices=("text", "json"),
        default="text",
        help="Output format",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-l",
        "--log-level",
        choices=tuple(_LOG_LEVELS),
        default=argparse.SUPPRESS,
        help="Set the logging level",
    )

    parser = argparse.ArgumentParser(
        prog="odnelazm", description="A mzalendo.com hansard scraper", parents=[common]
    )
    commands = parser.add_subparsers(dest="command", required=True)

    listing = commands.add_parser(
        "list",
        parents=[common],
        help="List available parliamentary sittings with optional filtering and pagination",
    )
    listing.add_argument(
        "--limit", type=_positive_count, help="Maximum number of results to return"
    )
    listing.add_argument(
        "--offset",
        type=_positive_count,
        help="Number of results to skip from the beginning",
    )
    listing.add_argument(
        "--start-date",
        type=_date,
        metavar="YYYY-MM-DD",
        help="Filter sessions from this date onwards",
    )
    listing.add_argument(
        "--end-date",
        type=_date,
        metavar="YYYY-MM-DD",
        help="Filter sessions up to this date",
    )
    _add_output(listing)
    listing.add_argument("--house", type=_house, help="Filter by house")

    detail = commands.add_parser(
        "detail",
        parents=[common],
        help="Fetch the full transcript of a sitting including sections, "
        "contributions and procedural notes",
    )
    detail.add_argument("url", help="URL of the hansard detail page to fetch")
    _add_output(detail)
    detail.add_argument(
        "--fetch-speakers",
        action="store_true",
        help="Fetch speaker details from person profile pages",
    )
    return parser


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


async def _run_list(args: argparse.Namespace) -> int:
    listing_filter = ListingFilter(
        start_date=args.start_date,
        end_date=args.end_date,
        house=args.house,
        limit=args.limit,
        offset=args.offset,
    )
    try:
        listing_filter.validate()
    except ValueError as exc:
        log.error("Invalid args: %s", exc)
        return 1

    async with WebScraper() as scraper:
        try:
            listings = await scraper.fetch_hansard_list()
        except ScraperError as exc:
            log.error("Error fetching hansard list: %s", exc)
            return 1

    listings = listing_filter.apply(listings)
    if args.format == "json":
        _print_json([listing.to_dict() for listing in listings])
    elif not listings:
        print("No entries to display.")
    else:
        for number, listing in enumerate(listings, start=1):
            print(f"{number:>3}. {listing}")
        print(ListingStats.from_listings(listings), end="")
    return 0


async def _run_detail(args: argparse.Namespace) -> int:
    async with WebScraper() as scraper:
        try:
            detail = await scraper.fetch_hansard_detail(args.url, args.fetch_speakers)
        except ScraperError as exc:
            log.error("Error fetching hansard detail: %s", exc)
            return 1

    if args.format == "json":
        _print_json(detail.to_dict())
    else:
        print(detail)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    level = _LOG_LEVELS[getattr(args, "log_level", "info")]
    logging.basicConfig(level=level)
    log.setLevel(level)

    runner = _run_list if args.command == "list" else _run_detail
    return asyncio.run(runner(args))