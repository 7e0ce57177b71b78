"""
TCGCSV 3rd party provider

Provider for fetching Pokemon TCG pricing data from tcgcsv.com API endpoints.
Every group is fetched as products + prices and flattened into one row per
(product, price subtype), the same shape a pricing CSV export has.
"""

import logging
import time
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple

import pydantic
import requests
from singleton_decorator import singleton

from ..pricing_keys import resolve_group_code
from ..ptcgjson_config import PtcgjsonConfig
from .abstract import AbstractProvider, QueryParams
from .tcgcsv_models import TcgCsvGroup, TcgCsvPrice, TcgCsvProduct, TcgCsvResponse

LOGGER = logging.getLogger(__name__)


@singleton
class TcgCsvProvider(AbstractProvider):
    """
    Crawls tcgcsv.com (a public TCGplayer mirror) one group at a time
    and flattens products and prices into pricing rows
    """

    base_url: str
    category: str
    request_delay_sec: float
    max_groups: int

    def __init__(self) -> None:
        super().__init__(self._build_http_header())
        config = PtcgjsonConfig()
        self.base_url = config.tcgcsv_url.rstrip("/")
        self.category = config.tcgcsv_category
        self.request_delay_sec = config.pricing_request_delay_sec
        self.max_groups = config.max_pricing_groups

    def _build_http_header(self) -> Dict[str, str]:
        # Public endpoints, no auth
        return {"Content-Type": "application/json"}

    def download(self, url: str, params: QueryParams = None) -> Any:
        """
        tcgcsv serves JSON envelopes; callers unwrap them
        """
        return self.download_json(url, params)

    def _get_results(self, url: str, label: str) -> List[Dict[str, Any]]:
        """
        Download an endpoint and unwrap its results
        :param url: Endpoint
        :param label: What is being fetched (for logging)
        :return: Result rows, empty if the API reports failure
        """
        response = TcgCsvResponse.model_validate(self.download(url))
        if not response.success:
            LOGGER.warning(f"TCGCSV API returned success=false for {label}: {response.errors}")
            return []
        return response.results

    def fetch_groups(self) -> List[TcgCsvGroup]:
        """
        Get every product group of the category
        :return: Groups
        """
        results = self._get_results(
            f"{self.base_url}/{self.category}/groups", f"category {self.category} groups"
        )
        groups = []
        for group in results:
            try:
                groups.append(TcgCsvGroup.model_validate(group))
            except pydantic.ValidationError as error:
                LOGGER.warning(f"Ignoring malformed group in category {self.category}: {error}")
        LOGGER.info(f"Found {len(groups)} TCGCSV groups in category {self.category}")
        return groups

    def fetch_group_products(self, group_id: int) -> List[TcgCsvProduct]:
        """
        Get product metadata (name, collector number, rarity) of a group
        :param group_id: TCGCSV group ID
        :return: Products
        """
        products = []
        for product in self._get_results(
            f"{self.base_url}/{self.category}/{group_id}/products",
            f"group {group_id} products",
        ):
            try:
                products.append(TcgCsvProduct.model_validate(product))
            except pydantic.ValidationError as error:
                LOGGER.warning(f"Ignoring malformed product in group {group_id}: {error}")
        return products

    def fetch_group_prices(self, group_id: int) -> List[TcgCsvPrice]:
        """
        Get current prices of a group
        :param group_id: TCGCSV group ID
        :return: Prices (one per product and subtype)
        """
        prices = []
        for price in self._get_results(
            f"{self.base_url}/{self.category}/{group_id}/prices",
            f"group {group_id} prices",
        ):
            try:
                prices.append(TcgCsvPrice.model_validate(price))
            except pydantic.ValidationError as error:
                LOGGER.warning(f"Ignoring malformed price in group {group_id}: {error}")
        return prices

    @staticmethod
    def resolve_set_code(
        group: TcgCsvGroup, set_name_lookup: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Set code a group's prices are keyed under
        :param group: TCGCSV group
        :param set_name_lookup: Lowercase set name => set id
        :return: Set code, or the group's own abbreviation/id when the
        name matches no known set
        """
        group_name = group.name.strip().lower()
        set_code = resolve_group_code(group_name, set_name_lookup)
        if set_code and set_code != group_name:
            return set_code
        return (group.abbreviation or str(group.groupId)).strip().lower()

    @staticmethod
    def build_group_rows(
        group: TcgCsvGroup,
        set_code: str,
        products: List[TcgCsvProduct],
        prices: List[TcgCsvPrice],
    ) -> List[Dict[str, Any]]:
        """
        Join products with their prices on productId
        :param group: TCGCSV group
        :param set_code: Set code to key the rows under
        :param products: Group products
        :param prices: Group prices
        :return: Flat pricing rows
        """
        prices_by_product: Dict[int, List[TcgCsvPrice]] = defaultdict(list)
        for price in prices:
            prices_by_product[price.productId].append(price)

        rows = []
        for product in products:
            if not product.name:
                continue
            for price in prices_by_product.get(product.productId, []):
                rows.append(
                    {
                        "groupId": set_code,
                        "groupName": group.name,
                        "productId": product.productId,
                        "name": product.name,
                        "extNumber": product.get_extended_value("Number"),
                        "extRarity": product.get_extended_value("Rarity"),
                        "subTypeName": price.subTypeName or "Normal",
                        "lowPrice": price.lowPrice,
                        "midPrice": price.midPrice,
                        "highPrice": price.highPrice,
                        "marketPrice": price.marketPrice,
                        "directLowPrice": price.directLowPrice,
                    }
                )
        return rows

    def generate_pricing_rows(
        self, set_name_lookup: Optional[Dict[str, str]] = None
    ) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
        """
        Crawl every group of the category. A group that fails is logged and
        skipped; failing to list the groups at all raises.
        :param set_name_lookup: Lowercase set name => set id
        :return: Flat pricing rows, crawl counters
        """
        groups = self.fetch_groups()
        if self.max_groups > 0:
            groups = groups[: self.max_groups]

        rows: List[Dict[str, Any]] = []
        processed_groups = 0
        failed_groups = 0
        total_products = 0

        for index, group in enumerate(groups):
            LOGGER.info(
                f"Processing group: {group.name} ({index + 1}/{len(groups)})"
            )
            try:
                products = self.fetch_group_products(group.groupId)
                if not products:
                    LOGGER.warning(f"No products found for {group.name}")
                    continue

                prices = self.fetch_group_prices(group.groupId)
                group_rows = self.build_group_rows(
                    group,
                    self.resolve_set_code(group, set_name_lookup),
                    products,
                    prices,
                )
            except (requests.RequestException, ValueError) as error:
                LOGGER.error(f"Error processing group {group.groupId}: {error}")
                failed_groups += 1
                continue
            finally:
                if self.request_delay_sec > 0:
                    time.sleep(self.request_delay_sec)

            rows.extend(group_rows)
            processed_groups += 1
            total_products += len({row["productId"] for row in group_rows})
            LOGGER.info(f"Added {len(group_rows)} price rows from {group.name}")

        return rows, {
            "processedGroups": processed_groups,
            "failedGroups": failed_groups,
            "totalProducts": total_products,
        }
