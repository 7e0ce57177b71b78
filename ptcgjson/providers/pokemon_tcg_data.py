"""
Pokemon TCG Data 3rd party provider

Card metadata comes from the PokemonTCG/pokemon-tcg-data repository:
one canonical set listing plus one card file per set.
"""

import logging
import time
from typing import Any, Dict, List

import requests
from singleton_decorator import singleton

from ..ptcgjson_config import PtcgjsonConfig
from ..utils import unwrap_list, utc_timestamp
from .abstract import AbstractProvider, QueryParams

LOGGER = logging.getLogger(__name__)


@singleton
class PokemonTcgDataProvider(AbstractProvider):
    """
    Pokemon TCG Data provider for sets and cards
    """

    sets_url: str
    cards_url: str
    request_delay_sec: float

    def __init__(self) -> None:
        super().__init__(self._build_http_header())
        config = PtcgjsonConfig()
        self.sets_url = config.sets_url
        self.cards_url = config.cards_url
        self.request_delay_sec = config.card_request_delay_sec

    def _build_http_header(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def download(self, url: str, params: QueryParams = None) -> Any:
        """
        Raw GitHub files, always JSON
        """
        return self.download_json(url, params)

    def fetch_sets(self) -> List[Dict[str, Any]]:
        """
        Get the canonical set listing
        :return: [{id, name, series, releaseDate, ...}, ...]
        """
        payload = self.download(self.sets_url)
        sets = payload.get("data") if isinstance(payload, dict) else payload
        if not isinstance(sets, list):
            raise ValueError(
                f"Unexpected sets JSON from {self.sets_url} (expected an array)"
            )

        LOGGER.info(f"Fetched {len(sets)} sets")
        return [set_data for set_data in sets if isinstance(set_data, dict)]

    def fetch_set_cards(self, set_id: str) -> List[Dict[str, Any]]:
        """
        Get all cards of one set
        :param set_id: Set to download
        :return: Card records
        """
        payload = self.download(self.cards_url.format(set_id=set_id))
        return [card for card in unwrap_list(payload, "data") if isinstance(card, dict)]

    def build_raw_card_dataset(self) -> Dict[str, Any]:
        """
        Download the set listing and every set's cards. A set that fails
        to download is logged and left out; the run carries on.
        :return: {sets, cards, totalSets, totalCards, failedSets, lastUpdated}
        """
        sets = self.fetch_sets()

        cards: List[Dict[str, Any]] = []
        failed_sets: List[str] = []
        for index, set_data in enumerate(sets):
            set_id = str(set_data.get("id") or "")
            if not set_id:
                continue

            try:
                set_cards = self.fetch_set_cards(set_id)
                cards.extend(set_cards)
                LOGGER.info(
                    f"[{index + 1}/{len(sets)}] {set_id}: {len(set_cards)} cards"
                )
            except (requests.RequestException, ValueError) as error:
                LOGGER.error(f"Failed to fetch cards for set {set_id}: {error}")
                failed_sets.append(set_id)

            if self.request_delay_sec > 0:
                time.sleep(self.request_delay_sec)

        if failed_sets:
            LOGGER.warning(
                f"Skipped {len(failed_sets)} sets that failed to download: "
                f"{', '.join(failed_sets)}"
            )

        return {
            "sets": sets,
            "cards": cards,
            "totalSets": len(sets),
            "totalCards": len(cards),
            "failedSets": failed_sets,
            "lastUpdated": utc_timestamp(),
        }
