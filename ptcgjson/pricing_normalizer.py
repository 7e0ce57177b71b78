"""
Normalize heterogeneous pricing rows into the composite-key mapping
"""

import logging
from typing import Any, Dict, Iterable, Optional

from . import constants
from .classes import PtcgPricingRecordObject
from .pricing_keys import (
    build_pricing_key,
    extract_number_from_name,
    normalize_number,
    normalize_printing,
    resolve_group_code,
)
from .utils import get_first_present, get_str_or_none, parse_price

LOGGER = logging.getLogger(__name__)


class PricingNormalizer:
    """
    Fold pricing rows (JSON feed, tcgcsv crawl or CSV export) into
    a mapping of composite key => pricing record
    """

    set_name_lookup: Dict[str, str]
    rows_processed: int
    rows_skipped: int
    extracted_from_name: int
    duplicate_keys: int

    def __init__(self, set_name_lookup: Optional[Dict[str, str]] = None) -> None:
        """
        :param set_name_lookup: Lowercase set name => set id, used to
        translate group names into set codes
        """
        self.set_name_lookup = set_name_lookup or {}
        self.rows_processed = 0
        self.rows_skipped = 0
        self.extracted_from_name = 0
        self.duplicate_keys = 0

    def normalize_row(self, row: Dict[str, Any]) -> Optional[PtcgPricingRecordObject]:
        """
        Turn one upstream row into a pricing record
        :param row: Upstream row
        :return: Pricing record, or None if the row cannot be keyed
        """
        self.rows_processed += 1

        group_id = resolve_group_code(
            get_first_present(row, constants.GROUP_ID_FIELDS), self.set_name_lookup
        )
        if not group_id:
            self.rows_skipped += 1
            LOGGER.debug(f"Skipping pricing row without a group: {row}")
            return None

        product_name = str(get_first_present(row, ("name", "productName")) or "")

        raw_number = get_first_present(row, constants.EXT_NUMBER_FIELDS)
        if raw_number is None:
            raw_number = extract_number_from_name(product_name)
            if raw_number is not None:
                self.extracted_from_name += 1
        ext_number = normalize_number(raw_number)

        printing = normalize_printing(get_first_present(row, constants.PRINTING_FIELDS))
        language = get_first_present(row, constants.LANGUAGE_FIELDS)

        prices = {
            price_name: parse_price(get_first_present(row, field_names))
            for price_name, field_names in constants.PRICE_FIELDS.items()
        }

        return PtcgPricingRecordObject(
            key=build_pricing_key(
                group_id, ext_number, printing, language or constants.DEFAULT_LANGUAGE
            ),
            product_id=get_str_or_none(
                get_first_present(row, ("productId", "product_id"))
            ),
            name=product_name,
            group_id=group_id,
            group_name=str(get_first_present(row, ("groupName", "setName")) or ""),
            ext_number=ext_number,
            printing=printing,
            **prices,
        )

    def build_mapping(
        self, rows: Iterable[Dict[str, Any]]
    ) -> Dict[str, PtcgPricingRecordObject]:
        """
        Normalize every row. When two rows share a key, the later row wins.
        :param rows: Upstream rows
        :return: Composite key => pricing record
        """
        mapping: Dict[str, PtcgPricingRecordObject] = {}
        for row in rows:
            if not isinstance(row, dict):
                self.rows_processed += 1
                self.rows_skipped += 1
                continue

            record = self.normalize_row(row)
            if record is None:
                continue

            if record.key in mapping:
                self.duplicate_keys += 1
            mapping[record.key] = record

        LOGGER.info(
            f"Normalized {self.rows_processed} pricing rows into {len(mapping)} keys "
            f"({self.extracted_from_name} numbers taken from product names, "
            f"{self.rows_skipped} rows skipped, {self.duplicate_keys} duplicate keys)"
        )
        return mapping

    def get_counters(self) -> Dict[str, int]:
        """
        :return: Summary counters for the raw pricing dataset
        """
        return {
            "rowsProcessed": self.rows_processed,
            "rowsSkipped": self.rows_skipped,
            "extractedFromName": self.extracted_from_name,
            "duplicateKeys": self.duplicate_keys,
        }
