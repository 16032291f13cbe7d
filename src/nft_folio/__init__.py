"""
NFT Folio - one artist's works aggregated across marketplaces and wallets
"""

__version__ = "1.0.0"

from .aggregator import NFTAggregator, aggregate
from .models import NFT, CollectionGroup, EnrichedCollection, PriceQuote, MarketPrice

__all__ = [
    "NFTAggregator",
    "aggregate",
    "NFT",
    "CollectionGroup",
    "EnrichedCollection",
    "PriceQuote",
    "MarketPrice",
]
