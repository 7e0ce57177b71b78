"""
PTCGJSON Class Dispatcher
"""

from .ptcg_card import PtcgCardObject
from .ptcg_card_chunk import PtcgCardChunkObject
from .ptcg_manifest import PtcgManifestObject, PtcgSummaryObject, pricing_coverage
from .ptcg_pricing_record import PtcgPricingRecordObject
from .ptcg_search_index import PtcgSearchIndexObject
from .ptcg_set import PtcgSetObject

__all__ = [
    "PtcgCardChunkObject",
    "PtcgCardObject",
    "PtcgManifestObject",
    "PtcgPricingRecordObject",
    "PtcgSearchIndexObject",
    "PtcgSetObject",
    "PtcgSummaryObject",
    "pricing_coverage",
]
