"""
PTCGJSON Main Executor
"""

import argparse
import logging
import sys
import traceback

from ptcgjson import constants
from ptcgjson.utils import init_logger

LOGGER: logging.Logger = logging.getLogger(__name__)


def fetch_cards(output_pretty: bool) -> int:
    """
    Download every set's cards and dump the raw card dataset
    :param output_pretty: Indent the JSON instead of minifying it
    :return: Exit code
    """
    from ptcgjson.output_generator import write_to_file
    from ptcgjson.providers import PokemonTcgDataProvider

    dataset = PokemonTcgDataProvider().build_raw_card_dataset()
    write_to_file(constants.RAW_CARDS_FILE, dataset, output_pretty)
    return constants.EXIT_OK


def fetch_pricing(args: argparse.Namespace) -> int:
    """
    Build and dump the raw pricing dataset
    :param args: Parsed CLI arguments
    :return: Exit code
    """
    from ptcgjson.pricing_builder import PricingBuilder

    PricingBuilder(csv_path=args.pricing_csv).write_pricing_dataset(args.pretty)
    return constants.EXIT_OK


def merge(output_pretty: bool) -> int:
    """
    Join cards with pricing and dump the storefront files
    :param output_pretty: Indent the JSON instead of minifying it
    :return: Exit code
    """
    from ptcgjson.merge_builder import MergeBuilder

    MergeBuilder().build(output_pretty)
    return constants.EXIT_OK


def upload() -> int:
    """
    Publish the storefront files. Failed files are reported in the
    summary but do not fail the run.
    :return: Exit code
    """
    from ptcgjson.ptcgjson_config import PtcgjsonConfig
    from ptcgjson.shopify_handler import ShopifyAssetHandler

    ShopifyAssetHandler().upload_directory(PtcgjsonConfig().data_path)
    return constants.EXIT_OK


def validate_config_file_in_place() -> None:
    """
    Refuse to start without the packaged ptcgjson.properties
    """
    if not constants.CONFIG_PATH.exists():
        LOGGER.error(
            f"Missing configuration file {constants.CONFIG_PATH}; "
            "reinstall the package or restore the file from source"
        )
        raise ValueError(f"{constants.CONFIG_PATH} not found")


def dispatcher(args: argparse.Namespace) -> int:
    """
    PTCGJSON Dispatcher. Stages always run in pipeline order, whatever
    order the flags were given in.
    :return: First non-zero stage exit code, else 0
    """
    from ptcgjson.pricing_health import check_pricing_health
    from ptcgjson.ptcgjson_config import PtcgjsonConfig

    if args.chunk_size:
        PtcgjsonConfig().chunk_size = args.chunk_size
    if args.max_groups:
        PtcgjsonConfig().max_pricing_groups = args.max_groups

    stages = [
        (args.fetch_cards, "fetch-cards", lambda: fetch_cards(args.pretty)),
        (args.fetch_pricing, "fetch-pricing", lambda: fetch_pricing(args)),
        (args.merge, "merge", lambda: merge(args.pretty)),
        (args.upload, "upload", upload),
        (
            args.check_pricing,
            "check-pricing",
            lambda: check_pricing_health(
                strict=True if args.strict else None, diagnose=args.diagnose
            ),
        ),
    ]

    exit_code = constants.EXIT_OK
    for enabled, stage_name, stage in stages:
        if not enabled:
            continue

        LOGGER.info(f"Running stage: {stage_name}")
        stage_code = stage()
        if stage_code != constants.EXIT_OK and exit_code == constants.EXIT_OK:
            exit_code = stage_code

    return exit_code


def main() -> None:
    """
    PTCGJSON safe main call
    """
    from ptcgjson.arg_parser import parse_args
    from ptcgjson.ptcgjson_config import PtcgjsonConfig

    init_logger()
    args = parse_args()

    try:
        validate_config_file_in_place()
        LOGGER.info(
            f"Starting {PtcgjsonConfig().ptcgjson_version} on {constants.PTCGJSON_BUILD_DATE}"
        )
        exit_code = dispatcher(args)
    except FileNotFoundError as error:
        LOGGER.error(str(error))
        exit_code = constants.EXIT_MISSING_INPUT
    except Exception as error:
        LOGGER.fatal(f"Exception caught: {error} {traceback.format_exc()}")
        exit_code = constants.EXIT_FAILURE

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
