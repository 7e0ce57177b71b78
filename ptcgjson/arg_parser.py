"""
PTCGJSON Arg Parser to determine what actions to take
"""

import argparse
import logging
import pathlib
import sys
from typing import List, Optional

LOGGER = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """
    argparse type for counts that must be at least 1
    """
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments from user to determine which pipeline
    stages to run.
    :param argv: Arguments to parse (Default: sys.argv)
    :return: Namespace of requests
    """
    parser = argparse.ArgumentParser("ptcgjson")

    parser.add_argument(
        "--fetch-cards",
        "-C",
        action="store_true",
        help="Download every set and its cards into data/raw-cards.json.",
    )
    parser.add_argument(
        "--fetch-pricing",
        "-P",
        action="store_true",
        help="Build data/pricing-raw.json from the configured pricing source.",
    )
    parser.add_argument(
        "--pricing-csv",
        type=pathlib.Path,
        metavar="PATH",
        help="Read pricing rows from a local CSV export instead of the network.",
    )
    parser.add_argument(
        "--merge",
        "-M",
        action="store_true",
        help="Attach pricing to cards and write the chunked storefront files.",
    )
    parser.add_argument(
        "--upload",
        "-U",
        action="store_true",
        help="Upload finished data files as Shopify theme assets.",
    )
    parser.add_argument(
        "--check-pricing",
        "-H",
        action="store_true",
        help="Verify the pricing dataset holds enough entries.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Make --check-pricing exit non-zero when below the minimum entry count.",
    )
    parser.add_argument(
        "--diagnose",
        "-D",
        action="store_true",
        help="With --check-pricing, report pricing groups that match no card set.",
    )
    parser.add_argument(
        "--full-pipeline",
        "-A",
        action="store_true",
        help="Fetch cards, fetch pricing, merge and upload.",
    )
    parser.add_argument(
        "--chunk-size",
        type=positive_int,
        metavar="N",
        help="Cards per chunk file (Default: from config).",
    )
    parser.add_argument(
        "--max-groups",
        type=positive_int,
        metavar="N",
        help="Only crawl the first N tcgcsv groups (useful for testing).",
    )
    parser.add_argument(
        "--pretty",
        "-p",
        action="store_true",
        help="When dumping JSON files, prettify the contents instead of minifying them.",
    )

    # Show help menu if no arguments are passed
    if argv is None and len(sys.argv) == 1:
        parser.print_help()
        parser.exit()

    parsed_args = parser.parse_args(argv)

    if parsed_args.full_pipeline:
        parsed_args.fetch_cards = True
        parsed_args.fetch_pricing = True
        parsed_args.merge = True
        parsed_args.upload = True

    if parsed_args.diagnose and not parsed_args.check_pricing:
        LOGGER.info("--diagnose implies --check-pricing")
        parsed_args.check_pricing = True

    return parsed_args
