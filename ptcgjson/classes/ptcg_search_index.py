"""
PTCGJSON Search Index Object
"""
from typing import Any, Dict, List

from .json_object import JsonObject


class PtcgSearchIndexObject(JsonObject):
    """
    Facets the storefront search UI is built from
    """

    sets: List[Dict[str, Any]]
    types: List[str]
    rarities: List[str]
    total_cards: int
    total_sets: int
    cards_with_pricing: int

    def __init__(
        self,
        sets: List[Dict[str, Any]],
        types: List[str],
        rarities: List[str],
        total_cards: int,
        cards_with_pricing: int,
    ) -> None:
        self.sets = sets
        self.types = types
        self.rarities = rarities
        self.total_cards = total_cards
        self.total_sets = len(sets)
        self.cards_with_pricing = cards_with_pricing
