"""
PTCGJSON Singular Card Object
"""
from typing import Any, Dict, List, Optional

from .json_object import JsonObject
from .ptcg_pricing_record import PtcgPricingRecordObject


class PtcgCardObject(JsonObject):
    """
    A card as written to the storefront chunks: the upstream card
    record with its set resolved and its price attached
    """

    id: str
    name: str
    number: str
    rarity: str
    supertype: str
    types: List[str]
    set: Dict[str, Any]
    images: Dict[str, str]
    pricing: Optional[PtcgPricingRecordObject]

    def __init__(
        self,
        card_id: str,
        name: str = "",
        number: str = "",
        rarity: str = "",
        supertype: str = "",
        types: Optional[List[str]] = None,
        set_data: Optional[Dict[str, Any]] = None,
        images: Optional[Dict[str, str]] = None,
        pricing: Optional[PtcgPricingRecordObject] = None,
    ) -> None:
        self.id = card_id
        self.name = name
        self.number = number
        self.rarity = rarity
        self.supertype = supertype
        self.types = types or []
        self.set = set_data or {}
        self.images = images or {}
        self.pricing = pricing

    @classmethod
    def from_raw(
        cls,
        card: Dict[str, Any],
        set_data: Dict[str, Any],
        pricing: Optional[PtcgPricingRecordObject],
    ) -> "PtcgCardObject":
        """
        Build the output card from an upstream card record
        :param card: Upstream card record
        :param set_data: Resolved set (may be empty)
        :param pricing: Matched price, if any
        :return: Output card
        """
        images = card.get("images")
        if not isinstance(images, dict):
            images = {}
        raw_types = card.get("types")
        if isinstance(raw_types, str):
            raw_types = [raw_types]
        elif not isinstance(raw_types, list):
            raw_types = []

        return cls(
            card_id=str(card.get("id") or ""),
            name=str(card.get("name") or ""),
            number=str(card.get("number") or ""),
            rarity=str(card.get("rarity") or ""),
            supertype=str(card.get("supertype") or ""),
            types=[str(t) for t in raw_types if t],
            set_data=dict(set_data),
            images={
                size: str(images[size]) for size in ("small", "large") if images.get(size)
            },
            pricing=pricing,
        )

    def has_pricing(self) -> bool:
        """
        :return: Did a price attach to this card
        """
        return self.pricing is not None
