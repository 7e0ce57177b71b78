"""
Flat JSON pricing feed provider

A pricing feed is any URL answering with an array of pricing rows
(or an object wrapping that array under "data"/"results").
"""

import logging
from typing import Any, Dict, List

from singleton_decorator import singleton

from ..ptcgjson_config import PtcgjsonConfig
from ..utils import unwrap_list
from .abstract import AbstractProvider, QueryParams

LOGGER = logging.getLogger(__name__)


@singleton
class PricingFeedProvider(AbstractProvider):
    """
    Pricing feed provider
    """

    feed_url: str

    def __init__(self) -> None:
        super().__init__(self._build_http_header())
        self.feed_url = PtcgjsonConfig().pricing_url

    def _build_http_header(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def download(self, url: str, params: QueryParams = None) -> Any:
        return self.download_json(url, params)

    def fetch_rows(self) -> List[Dict[str, Any]]:
        """
        Get every pricing row of the feed
        :return: Pricing rows
        """
        payload = self.download(self.feed_url)
        rows = [row for row in unwrap_list(payload, "data", "results") if isinstance(row, dict)]
        LOGGER.info(f"Fetched {len(rows)} pricing rows from {self.feed_url}")
        return rows
