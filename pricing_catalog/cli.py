#!/usr/bin/env python3
"""
Pricing Catalog Command Line

Lists the offer index and queries product catalogs from a shell.

Usage:
    pricing-catalog services
    pricing-catalog urls
    pricing-catalog index --raw
    pricing-catalog query --product AmazonRDS -f instanceType=db.m4.large -f "location=US East*"
    pricing-catalog query --path offers/rds.json -f databaseEngine=PostgreSQL --json
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from pricing_catalog.catalog.models import SourceSelector
from pricing_catalog.config import get_settings
from pricing_catalog.core.exceptions import AppException
from pricing_catalog.services import PricingService


logger = logging.getLogger(__name__)


def parse_filter_args(pairs: List[str]) -> Dict[str, str]:
    """
    Parse repeated key=pattern arguments.

    Raises:
        ValueError: If a pair has no '='
    """
    filters: Dict[str, str] = {}
    for pair in pairs:
        key, sep, pattern = pair.partition("=")
        if not sep:
            raise ValueError(f"Filter must look like key=pattern: {pair!r}")
        filters[key] = pattern
    return filters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pricing-catalog",
        description="Find products in vendor pricing catalogs"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("services", help="List product names in the offer index")
    commands.add_parser("urls", help="List current offer file URLs")

    index = commands.add_parser("index", help="Print the offer index")
    index.add_argument("--raw", action="store_true", help="Print the index text unchanged")

    query = commands.add_parser("query", help="Find products matching attribute filters")
    source = query.add_mutually_exclusive_group(required=True)
    source.add_argument("--path", help="Local offer file")
    source.add_argument("--url", help="Offer file URL")
    source.add_argument("--product", help="Product name from the offer index")
    query.add_argument(
        "-f", "--filter",
        action="append",
        default=[],
        metavar="KEY=PATTERN",
        help="Attribute filter; * and ? are wildcards (repeatable)"
    )
    query.add_argument("--json", action="store_true", help="Print full records as JSON")

    return parser


def _selector_from_args(args: argparse.Namespace) -> SourceSelector:
    if args.path:
        return SourceSelector.path(args.path)
    if args.url:
        return SourceSelector.url(args.url)
    return SourceSelector.product_name(args.product)


def run(args: argparse.Namespace, service: PricingService) -> int:
    """Execute one command and return the exit status."""
    if args.command == "services":
        for name in service.list_services():
            print(name)
        return 0

    if args.command == "urls":
        for url in service.list_catalog_urls():
            print(url)
        return 0

    if args.command == "index":
        index = service.fetch_index(as_raw_text=args.raw)
        print(index if args.raw else json.dumps(index, indent=2))
        return 0

    filters = parse_filter_args(args.filter)
    result = service.run_query(_selector_from_args(args), filters)

    if args.json:
        print(json.dumps([p.model_dump() for p in result.products], indent=2))
    else:
        for product in result.products:
            print(f"{product.sku}\t{product.product_family or ''}")

    logger.info(f"{result.total} of {result.scanned} products matched")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or settings.debug) else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr
    )

    service = PricingService()
    try:
        return run(args, service)
    except ValueError as e:
        print(f"❌ ERROR: {e}", file=sys.stderr)
        return 2
    except AppException as e:
        print(f"❌ ERROR [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    finally:
        service.close()


if __name__ == "__main__":
    sys.exit(main())
