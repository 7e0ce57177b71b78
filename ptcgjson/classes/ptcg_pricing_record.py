"""
PTCGJSON Singular Pricing Record Object
"""
from typing import Any, Dict, Optional

from ..utils import parse_price
from .json_object import JsonObject


class PtcgPricingRecordObject(JsonObject):
    """
    One normalized upstream price, addressed by its composite key
    (group|number|printing|lang)
    """

    key: str
    product_id: Optional[str]
    name: str
    group_id: str
    group_name: str
    ext_number: str
    printing: str
    low: float
    mid: float
    high: float
    market: float
    direct_low: float

    def __init__(
        self,
        key: str,
        product_id: Optional[str] = None,
        name: str = "",
        group_id: str = "",
        group_name: str = "",
        ext_number: str = "",
        printing: str = "normal",
        low: float = 0.0,
        mid: float = 0.0,
        high: float = 0.0,
        market: float = 0.0,
        direct_low: float = 0.0,
    ) -> None:
        self.key = key
        self.product_id = product_id
        self.name = name
        self.group_id = group_id
        self.group_name = group_name
        self.ext_number = ext_number
        self.printing = printing
        self.low = low
        self.mid = mid
        self.high = high
        self.market = market
        self.direct_low = direct_low

    @classmethod
    def from_json(cls, key: str, record: Dict[str, Any]) -> "PtcgPricingRecordObject":
        """
        Rebuild a record from the raw pricing dataset
        :param key: Composite key the record is stored under
        :param record: Serialized record
        :return: Pricing record
        """
        product_id = record.get("productId")
        return cls(
            key=key,
            product_id=str(product_id) if product_id not in (None, "") else None,
            name=str(record.get("name") or ""),
            group_id=str(record.get("groupId") or ""),
            group_name=str(record.get("groupName") or ""),
            ext_number=str(record.get("extNumber") or ""),
            printing=str(record.get("printing") or "normal"),
            low=parse_price(record.get("low")),
            mid=parse_price(record.get("mid")),
            high=parse_price(record.get("high")),
            market=parse_price(record.get("market")),
            direct_low=parse_price(record.get("directLow")),
        )
