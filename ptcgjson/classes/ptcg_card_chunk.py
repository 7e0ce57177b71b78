"""
PTCGJSON Card Chunk Object
"""
from typing import List

from ..constants import CHUNK_FILE_PREFIX
from .json_object import JsonObject
from .ptcg_card import PtcgCardObject


class PtcgCardChunkObject(JsonObject):
    """
    One page of output cards. `chunk` is 1-based so the full card list
    is rebuilt by concatenating chunks 1..total_chunks
    """

    cards: List[PtcgCardObject]
    chunk: int
    total_chunks: int
    last_updated: str

    def __init__(
        self,
        cards: List[PtcgCardObject],
        chunk: int,
        total_chunks: int,
        last_updated: str,
    ) -> None:
        self.cards = cards
        self.chunk = chunk
        self.total_chunks = total_chunks
        self.last_updated = last_updated

    @staticmethod
    def file_name(chunk: int) -> str:
        """
        :param chunk: 1-based chunk number
        :return: File name the chunk is written to
        """
        return f"{CHUNK_FILE_PREFIX}{chunk}.json"
