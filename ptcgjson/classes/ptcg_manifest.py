"""
PTCGJSON Cards Manifest & Summary Objects
"""
from typing import List

from .json_object import JsonObject


def pricing_coverage(cards_with_pricing: int, total_cards: int) -> float:
    """
    Percentage of cards with a price, rounded to one decimal
    :param cards_with_pricing: Cards that matched a price
    :param total_cards: All cards
    :return: Coverage percentage (0.0 when there are no cards)
    """
    if total_cards <= 0:
        return 0.0
    return round(cards_with_pricing / total_cards * 100, 1)


class PtcgManifestObject(JsonObject):
    """
    Index of a merge run: which chunk files make up the card list
    """

    generated_at: str
    total_cards: int
    total_sets: int
    cards_with_pricing: int
    pricing_coverage: float
    chunk_size: int
    total_chunks: int
    chunks: List[str]

    def __init__(
        self,
        generated_at: str,
        total_cards: int,
        total_sets: int,
        cards_with_pricing: int,
        chunk_size: int,
        chunks: List[str],
    ) -> None:
        self.generated_at = generated_at
        self.total_cards = total_cards
        self.total_sets = total_sets
        self.cards_with_pricing = cards_with_pricing
        self.pricing_coverage = pricing_coverage(cards_with_pricing, total_cards)
        self.chunk_size = chunk_size
        self.total_chunks = len(chunks)
        self.chunks = chunks


class PtcgSummaryObject(JsonObject):
    """
    Coverage statistics of a merge run
    """

    total_cards: int
    total_sets: int
    cards_with_pricing: int
    cards_without_pricing: int
    pricing_coverage: float
    pricing_entries: int
    last_updated: str

    def __init__(
        self,
        total_cards: int,
        total_sets: int,
        cards_with_pricing: int,
        pricing_entries: int,
        last_updated: str,
    ) -> None:
        self.total_cards = total_cards
        self.total_sets = total_sets
        self.cards_with_pricing = cards_with_pricing
        self.cards_without_pricing = total_cards - cards_with_pricing
        self.pricing_coverage = pricing_coverage(cards_with_pricing, total_cards)
        self.pricing_entries = pricing_entries
        self.last_updated = last_updated
