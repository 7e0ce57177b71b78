"""TCGCSV API data models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class TcgCsvResponse(BaseModel):
    """Envelope every tcgcsv endpoint answers with."""

    success: bool = True
    errors: List[Any] = Field(default_factory=list)
    totalItems: int = 0
    results: List[Dict[str, Any]] = Field(default_factory=list)


class TcgCsvGroup(BaseModel):
    """Product group (one expansion / product line)."""

    groupId: int
    name: str = ""
    abbreviation: Optional[str] = None


class TcgCsvExtendedData(BaseModel):
    """Name/value attribute attached to a product."""

    name: str = ""
    displayName: str = ""
    value: Any = None


class TcgCsvProduct(BaseModel):
    """Single product from a group."""

    productId: int
    name: str = ""
    cleanName: str = ""
    groupId: Optional[int] = None
    extendedData: List[TcgCsvExtendedData] = Field(default_factory=list)

    def get_extended_value(self, name: str) -> Optional[str]:
        """Return the value of an extendedData attribute, if present."""
        for data_item in self.extendedData:
            if data_item.name == name and data_item.value not in (None, ""):
                return str(data_item.value)
        return None


class TcgCsvPrice(BaseModel):
    """Price points of one product in one subtype (Normal, Holofoil, ...)."""

    productId: int
    subTypeName: Optional[str] = None
    lowPrice: Optional[float] = None
    midPrice: Optional[float] = None
    highPrice: Optional[float] = None
    marketPrice: Optional[float] = None
    directLowPrice: Optional[float] = None

    @field_validator(
        "lowPrice",
        "midPrice",
        "highPrice",
        "marketPrice",
        "directLowPrice",
        mode="before",
    )
    @classmethod
    def drop_unparsable_price(cls, value: Any) -> Optional[float]:
        """Unparsable prices are treated as missing rather than rejected."""
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
