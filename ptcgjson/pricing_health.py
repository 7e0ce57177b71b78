"""
Pricing health check & diagnostics
"""

import logging
import pathlib
from typing import Any, Dict, List, Optional

from . import constants
from .merge_builder import infer_set_code
from .pricing_keys import build_pricing_key
from .ptcgjson_config import PtcgjsonConfig
from .utils import load_json_file

LOGGER = logging.getLogger(__name__)

SAMPLE_SIZE = 5


def diagnose_pricing(
    pricing: Dict[str, Any], data_path: pathlib.Path, sample_size: int = SAMPLE_SIZE
) -> Dict[str, List[str]]:
    """
    Explain why prices fail to attach: pricing group codes that no card set
    uses, and a few keys from each side for comparison
    :param pricing: Composite key => pricing record
    :param data_path: Data directory holding the raw card dataset
    :param sample_size: How many sample keys to report per side
    :return: Diagnosis (unmatchedGroups, pricingGroups, samplePricingKeys, sampleCardKeys)
    """
    pricing_groups = sorted({key.split("|", 1)[0] for key in pricing})
    diagnosis: Dict[str, List[str]] = {
        "pricingGroups": pricing_groups,
        "unmatchedGroups": [],
        "samplePricingKeys": sorted(pricing)[:sample_size],
        "sampleCardKeys": [],
    }

    raw_cards_path = data_path.joinpath(constants.RAW_CARDS_FILE)
    if not raw_cards_path.is_file():
        LOGGER.warning(
            f"{constants.RAW_CARDS_FILE} not found, cannot compare against card sets"
        )
        return diagnosis

    raw_cards = load_json_file(raw_cards_path)
    if isinstance(raw_cards, list):
        raw_cards = {"cards": raw_cards, "sets": []}

    set_ids = {
        str(set_data.get("id")).lower()
        for set_data in raw_cards.get("sets", [])
        if isinstance(set_data, dict) and set_data.get("id")
    }
    diagnosis["unmatchedGroups"] = [
        group for group in pricing_groups if group not in set_ids
    ]

    for card in raw_cards.get("cards", [])[:sample_size]:
        if not isinstance(card, dict):
            continue
        embedded_set = card.get("set")
        set_code = (
            embedded_set.get("id") if isinstance(embedded_set, dict) else None
        ) or infer_set_code(card)
        diagnosis["sampleCardKeys"].append(
            build_pricing_key(set_code, card.get("number"), "normal")
        )

    LOGGER.info(
        f"Pricing groups: {len(pricing_groups)} | Card sets: {len(set_ids)} | "
        f"Unmatched pricing groups: {len(diagnosis['unmatchedGroups'])}"
    )
    if diagnosis["unmatchedGroups"]:
        LOGGER.warning(
            "Pricing groups with no matching set: "
            + ", ".join(diagnosis["unmatchedGroups"][:25])
        )
    LOGGER.info(f"Sample pricing keys: {diagnosis['samplePricingKeys']}")
    LOGGER.info(f"Sample card keys: {diagnosis['sampleCardKeys']}")
    return diagnosis


def check_pricing_health(
    data_path: Optional[pathlib.Path] = None,
    min_entries: Optional[int] = None,
    strict: Optional[bool] = None,
    diagnose: bool = False,
) -> int:
    """
    Validate the raw pricing dataset before it is relied upon
    :param data_path: Data directory (Default: configured data path)
    :param min_entries: Minimum acceptable pricing entries (Default: configured)
    :param strict: Fail instead of warn when below the minimum (Default: configured)
    :param diagnose: Also report why prices fail to attach
    :return: Exit code (0 healthy or lenient, 1 strict failure, 2 missing input)
    """
    config = PtcgjsonConfig()
    data_path = data_path or config.data_path
    min_entries = config.min_pricing_entries if min_entries is None else min_entries
    strict = config.pricing_strict if strict is None else strict

    pricing_path = data_path.joinpath(constants.RAW_PRICING_FILE)
    if not pricing_path.is_file():
        LOGGER.error(
            f"Missing required file: {pricing_path} (run with --fetch-pricing first)"
        )
        return constants.EXIT_MISSING_INPUT

    dataset = load_json_file(pricing_path)
    pricing = dataset.get("pricing") or {}
    LOGGER.info(
        f"Pricing entries: {len(pricing)} (minimum {min_entries}) "
        f"from {dataset.get('source', 'unknown')}"
    )
    if dataset.get("source") == "error":
        LOGGER.error(f"Pricing fetch failed upstream: {dataset.get('error')}")

    summary_path = data_path.joinpath(constants.SUMMARY_FILE)
    if summary_path.is_file():
        summary = load_json_file(summary_path)
        LOGGER.info(
            f"Card coverage: {summary.get('cardsWithPricing', 0)}/"
            f"{summary.get('totalCards', 0)} ({summary.get('pricingCoverage', 0.0)}%)"
        )

    if diagnose:
        diagnose_pricing(pricing, data_path)

    if len(pricing) >= min_entries:
        LOGGER.info("Pricing health check passed")
        return constants.EXIT_OK

    if strict:
        LOGGER.error(
            f"Pricing health check failed: {len(pricing)} entries < {min_entries}"
        )
        return constants.EXIT_FAILURE

    LOGGER.warning(
        f"Low pricing entry count ({len(pricing)} < {min_entries}), continuing"
    )
    return constants.EXIT_OK
