"""
Merge card data with pricing data

Each card gets its set resolved (embedded set, else looked up from the set
registry by the code inferred from its id or image URL) and at most one
price: the first composite key variant present in the pricing mapping.
"""

import datetime
import logging
import pathlib
import re
import urllib.parse
from typing import Any, Dict, List, Optional, Tuple

import dateutil.parser

from . import constants
from .classes import (
    PtcgCardObject,
    PtcgPricingRecordObject,
    PtcgSearchIndexObject,
    PtcgSetObject,
    PtcgSummaryObject,
)
from .output_generator import generate_merge_outputs
from .pricing_keys import card_key_candidates
from .ptcgjson_config import PtcgjsonConfig
from .utils import get_first_present, load_json_file, utc_timestamp

LOGGER = logging.getLogger(__name__)

CARD_ID_SET_REGEX = re.compile(r"^([A-Za-z0-9]+)-")
CARD_IMAGE_NAME_REGEX = re.compile(
    r"^[A-Za-z0-9]+(?:_hires)?\.(?:png|jpe?g|webp)$", re.IGNORECASE
)
RELEASE_DATE_DEFAULT = datetime.datetime(1, 1, 1)


def infer_set_code(card: Dict[str, Any]) -> str:
    """
    Guess a card's set code when it carries no set object:
    "base5-36" => "base5", else ".../base5/36.png" => "base5"
    :param card: Upstream card record
    :return: Set code, or "" if nothing can be inferred
    """
    match = CARD_ID_SET_REGEX.match(str(card.get("id") or ""))
    if match:
        return match.group(1)

    images = card.get("images")
    if not isinstance(images, dict):
        return ""

    for size in ("small", "large"):
        segments = [
            segment
            for segment in urllib.parse.urlparse(str(images.get(size) or "")).path.split("/")
            if segment
        ]
        if len(segments) >= 2 and CARD_IMAGE_NAME_REGEX.match(segments[-1]):
            return segments[-2]

    return ""


def build_set_registry(sets: List[Dict[str, Any]]) -> Dict[str, PtcgSetObject]:
    """
    Index the canonical set listing by lowercase id
    :param sets: Upstream set records
    :return: Lowercase set id => set
    """
    registry: Dict[str, PtcgSetObject] = {}
    for set_data in sets:
        if not isinstance(set_data, dict):
            continue
        set_object = PtcgSetObject.from_dict(set_data)
        if set_object:
            registry[set_object.id.lower()] = set_object
    return registry


def resolve_set(
    card: Dict[str, Any], set_registry: Dict[str, PtcgSetObject]
) -> Dict[str, Any]:
    """
    A non-empty embedded set is kept verbatim. Otherwise the inferred set
    code is looked up in the registry; no match leaves the set empty.
    :param card: Upstream card record
    :param set_registry: Lowercase set id => set
    :return: Set dict (possibly empty)
    """
    embedded = card.get("set")
    if isinstance(embedded, dict) and embedded:
        return dict(embedded)

    set_code = infer_set_code(card).lower()
    set_object = set_registry.get(set_code) if set_code else None
    return set_object.to_json() if set_object else {}


def find_pricing(
    set_code: str,
    number: Any,
    printing: Any,
    pricing_map: Dict[str, PtcgPricingRecordObject],
    language: Any = constants.DEFAULT_LANGUAGE,
) -> Optional[PtcgPricingRecordObject]:
    """
    First pricing record whose key matches one of the card's key variants
    :param set_code: Card's set code
    :param number: Card's collector number
    :param printing: Card's declared/inferred printing
    :param pricing_map: Composite key => pricing record
    :param language: Card language
    :return: Pricing record, or None
    """
    for key in card_key_candidates(set_code, number, printing, language):
        if key in pricing_map:
            return pricing_map[key]
    return None


def release_date_sort_key(set_data: Dict[str, Any]) -> Tuple[datetime.datetime, str]:
    """
    Order sets by release date ("1999/01/09"), undated sets last.
    Missing date parts default to January 1st and any UTC offset is dropped.
    """
    try:
        release_date = dateutil.parser.parse(
            str(set_data.get("releaseDate") or ""), default=RELEASE_DATE_DEFAULT
        ).replace(tzinfo=None)
    except (ValueError, OverflowError):
        release_date = datetime.datetime.max
    return release_date, str(set_data.get("id") or "")


def build_search_index(cards: List[PtcgCardObject]) -> PtcgSearchIndexObject:
    """
    Derive the search facets from the merged cards
    :param cards: Merged cards
    :return: Search index
    """
    sets: Dict[str, Dict[str, Any]] = {}
    types = set()
    rarities = set()
    for card in cards:
        set_id = card.set.get("id")
        if set_id and set_id not in sets:
            sets[set_id] = {
                "id": set_id,
                "name": card.set.get("name", ""),
                "series": card.set.get("series", ""),
                "releaseDate": card.set.get("releaseDate", ""),
            }
        types.update(card.types)
        if card.rarity:
            rarities.add(card.rarity)

    return PtcgSearchIndexObject(
        sets=sorted(sets.values(), key=release_date_sort_key),
        types=sorted(types),
        rarities=sorted(rarities),
        total_cards=len(cards),
        cards_with_pricing=sum(1 for card in cards if card.has_pricing()),
    )


class MergeBuilder:
    """
    Join the raw card dataset with the raw pricing dataset and write
    the storefront artifacts
    """

    data_path: pathlib.Path
    chunk_size: int
    last_updated: str
    set_registry: Dict[str, PtcgSetObject]
    pricing_map: Dict[str, PtcgPricingRecordObject]

    def __init__(
        self,
        data_path: Optional[pathlib.Path] = None,
        chunk_size: Optional[int] = None,
        last_updated: Optional[str] = None,
    ) -> None:
        self.data_path = data_path or PtcgjsonConfig().data_path
        self.chunk_size = chunk_size or PtcgjsonConfig().chunk_size
        self.last_updated = last_updated or utc_timestamp()
        self.set_registry = {}
        self.pricing_map = {}

    def load_cards(self) -> List[Dict[str, Any]]:
        """
        Load the raw card dataset ({sets, cards, ...} or a bare card array)
        and the set registry it carries
        :return: Upstream card records
        """
        raw_cards = load_json_file(
            self.data_path.joinpath(constants.RAW_CARDS_FILE),
            hint="run with --fetch-cards first",
        )
        if isinstance(raw_cards, list):
            cards, sets = raw_cards, []
        else:
            cards, sets = raw_cards.get("cards", []), raw_cards.get("sets", [])

        self.set_registry = build_set_registry(sets)
        return [card for card in cards if isinstance(card, dict)]

    def load_pricing(self) -> Dict[str, PtcgPricingRecordObject]:
        """
        Load the raw pricing dataset. Merging without one is allowed:
        every card simply ends up without a price.
        :return: Composite key => pricing record
        """
        pricing_path = self.data_path.joinpath(constants.RAW_PRICING_FILE)
        if not pricing_path.is_file():
            LOGGER.warning(
                f"{pricing_path} not found, merging without pricing "
                "(run with --fetch-pricing first)"
            )
            return {}

        pricing = load_json_file(pricing_path).get("pricing") or {}
        return {
            key: PtcgPricingRecordObject.from_json(key, record)
            for key, record in pricing.items()
            if isinstance(record, dict)
        }

    def merge_card(self, card: Dict[str, Any]) -> PtcgCardObject:
        """
        Resolve one card's set and price
        :param card: Upstream card record
        :return: Output card
        """
        set_data = resolve_set(card, self.set_registry)
        set_code = str(set_data.get("id") or infer_set_code(card))
        printing = get_first_present(card, ("printing", "variant", "rarity"))
        language = (
            get_first_present(card, constants.LANGUAGE_FIELDS)
            or constants.DEFAULT_LANGUAGE
        )

        pricing = find_pricing(
            set_code, card.get("number"), printing, self.pricing_map, language
        )
        return PtcgCardObject.from_raw(card, set_data, pricing)

    def merge_cards(self, raw_cards: List[Dict[str, Any]]) -> List[PtcgCardObject]:
        """
        Merge every card, keeping input order
        :param raw_cards: Upstream card records
        :return: Output cards
        """
        return [self.merge_card(card) for card in raw_cards]

    def build(self, pretty_print: bool = False) -> PtcgSummaryObject:
        """
        Run the merge stage end to end
        :param pretty_print: Pretty or minimal JSON
        :return: Run summary
        """
        raw_cards = self.load_cards()
        self.pricing_map = self.load_pricing()
        LOGGER.info(
            f"Cards: {len(raw_cards)} | Sets: {len(self.set_registry)} | "
            f"Pricing entries: {len(self.pricing_map)}"
        )

        cards = self.merge_cards(raw_cards)
        search_index = build_search_index(cards)

        unresolved = sum(1 for card in cards if not card.set)
        if unresolved:
            LOGGER.warning(f"{unresolved} cards have no resolvable set")

        summary = generate_merge_outputs(
            cards,
            search_index,
            pricing_entries=len(self.pricing_map),
            chunk_size=self.chunk_size,
            last_updated=self.last_updated,
            pretty_print=pretty_print,
            data_path=self.data_path,
        )
        LOGGER.info(
            f"Merged {summary.total_cards} cards, {summary.cards_with_pricing} with "
            f"pricing ({summary.pricing_coverage}% coverage)"
        )
        return summary
