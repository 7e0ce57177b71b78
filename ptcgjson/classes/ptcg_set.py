"""
PTCGJSON Singular Set Object
"""
from typing import Any, Dict, Optional

from .json_object import JsonObject


class PtcgSetObject(JsonObject):
    """
    PTCGJSON Singular Set Object
    """

    id: str
    name: str
    series: str
    release_date: str

    def __init__(
        self,
        set_id: str,
        name: str = "",
        series: str = "",
        release_date: str = "",
    ) -> None:
        self.id = set_id
        self.name = name
        self.series = series
        self.release_date = release_date

    @classmethod
    def from_dict(cls, set_data: Dict[str, Any]) -> Optional["PtcgSetObject"]:
        """
        Build from an upstream set record
        :param set_data: Upstream set record
        :return: Set object, or None if the record has no id
        """
        set_id = str(set_data.get("id") or "").strip()
        if not set_id:
            return None

        return cls(
            set_id,
            str(set_data.get("name") or ""),
            str(set_data.get("series") or ""),
            str(set_data.get("releaseDate") or ""),
        )
