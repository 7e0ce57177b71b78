"""
Provider Dispatcher
"""

from .pokemon_tcg_data import PokemonTcgDataProvider
from .pricing_feed import PricingFeedProvider
from .tcgcsv_provider import TcgCsvProvider

__all__ = [
    "PokemonTcgDataProvider",
    "PricingFeedProvider",
    "TcgCsvProvider",
]
