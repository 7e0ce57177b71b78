"""
Construct the raw pricing dataset for PTCGJSON
"""

import csv
import logging
import pathlib
from typing import Any, Dict, List, Optional

import requests

from . import constants
from .pricing_normalizer import PricingNormalizer
from .providers import PricingFeedProvider, TcgCsvProvider
from .ptcgjson_config import PtcgjsonConfig
from .utils import load_json_file, utc_timestamp, write_json_file

LOGGER = logging.getLogger(__name__)


class PricingBuilder:
    """
    Build today's pricing mapping from the configured source: a local CSV
    export, a flat JSON feed, or (by default) a tcgcsv.com crawl
    """

    csv_path: Optional[pathlib.Path]
    data_path: pathlib.Path

    def __init__(
        self,
        csv_path: Optional[pathlib.Path] = None,
        data_path: Optional[pathlib.Path] = None,
    ) -> None:
        self.csv_path = csv_path or PtcgjsonConfig().pricing_csv_path
        self.data_path = data_path or PtcgjsonConfig().data_path

    def load_set_name_lookup(self) -> Dict[str, str]:
        """
        Set names from the raw card dataset, so pricing groups named after
        a set can be keyed by its code. Optional: pricing can be fetched
        before the cards are.
        :return: Lowercase set name => set id
        """
        raw_cards_path = self.data_path.joinpath(constants.RAW_CARDS_FILE)
        if not raw_cards_path.is_file():
            LOGGER.info(
                f"{constants.RAW_CARDS_FILE} not found, group names resolve via aliases only"
            )
            return {}

        raw_cards = load_json_file(raw_cards_path)
        sets = raw_cards.get("sets", []) if isinstance(raw_cards, dict) else []
        return {
            str(set_data["name"]).strip().lower(): str(set_data["id"])
            for set_data in sets
            if isinstance(set_data, dict) and set_data.get("name") and set_data.get("id")
        }

    @staticmethod
    def read_csv_rows(csv_path: pathlib.Path) -> List[Dict[str, str]]:
        """
        Read a pricing CSV export (header row, quoted fields)
        :param csv_path: CSV file
        :return: One dict per data row
        """
        if not csv_path.is_file():
            raise FileNotFoundError(
                f"Pricing CSV not found: {csv_path} "
                "(export one with columns groupId, extNumber, marketPrice, ...)"
            )

        with csv_path.open(encoding="utf-8-sig", newline="") as file:
            reader = csv.DictReader(file)
            if reader.fieldnames:
                reader.fieldnames = [
                    field_name.strip().strip('"') for field_name in reader.fieldnames
                ]
            rows = [
                {key: (value or "").strip() for key, value in row.items() if key}
                for row in reader
                if any((value or "").strip() for value in row.values() if isinstance(value, str))
            ]

        LOGGER.info(f"Read {len(rows)} pricing rows from {csv_path}")
        return rows

    def build_pricing_dataset(self) -> Dict[str, Any]:
        """
        Fetch and normalize pricing rows from the configured source.
        A network source that cannot be reached yields an explicit empty
        dataset (source = "error") instead of aborting the pipeline.
        :return: Raw pricing dataset
        """
        normalizer = PricingNormalizer(self.load_set_name_lookup())
        crawl_stats: Dict[str, int] = {}

        if self.csv_path:
            source = f"csv:{self.csv_path.name}"
            rows = self.read_csv_rows(self.csv_path)
        else:
            try:
                if PtcgjsonConfig().pricing_url:
                    source = PtcgjsonConfig().pricing_url
                    rows = PricingFeedProvider().fetch_rows()
                else:
                    source = "tcgcsv.com API"
                    rows, crawl_stats = TcgCsvProvider().generate_pricing_rows(
                        normalizer.set_name_lookup
                    )
            except (requests.RequestException, ValueError) as error:
                LOGGER.error(f"Error fetching pricing data: {error}")
                return self.build_error_dataset(str(error))

        mapping = normalizer.build_mapping(rows)
        product_ids = {record.product_id for record in mapping.values() if record.product_id}

        return {
            "pricing": mapping,
            "lastUpdated": utc_timestamp(),
            "source": source,
            "totalProducts": crawl_stats.get("totalProducts", len(product_ids)),
            "processedGroups": crawl_stats.get(
                "processedGroups", len({record.group_id for record in mapping.values()})
            ),
            "failedGroups": crawl_stats.get("failedGroups", 0),
            **normalizer.get_counters(),
        }

    @staticmethod
    def build_error_dataset(error: str) -> Dict[str, Any]:
        """
        Empty pricing dataset recording why pricing is unavailable
        :param error: Failure message
        :return: Raw pricing dataset with no entries
        """
        return {
            "pricing": {},
            "lastUpdated": utc_timestamp(),
            "source": "error",
            "error": error,
            "note": "Fallback empty pricing due to API error",
        }

    def write_pricing_dataset(self, pretty_print: bool = False) -> pathlib.Path:
        """
        Build the pricing dataset and persist it
        :param pretty_print: Pretty or minimal JSON
        :return: File written
        """
        dataset = self.build_pricing_dataset()
        LOGGER.info(
            f"Pricing summary: {len(dataset['pricing'])} unique price entries "
            f"from {dataset['source']}"
        )
        return write_json_file(
            self.data_path.joinpath(constants.RAW_PRICING_FILE), dataset, pretty_print
        )
