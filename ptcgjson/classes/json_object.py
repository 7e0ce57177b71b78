"""
Base for everything written to the data directory
"""
import abc
from typing import Any, Dict

from ..utils import to_camel_case


class JsonObject(abc.ABC):
    """
    Public attributes become camelCase JSON keys, so a field named
    cards_with_pricing is written as "cardsWithPricing".
    """

    def to_json(self) -> Dict[str, Any]:
        """
        Hook for json.dump(default=...)
        """
        return {
            to_camel_case(name): value
            for name, value in vars(self).items()
            if not name.startswith("_") and not callable(value)
        }
