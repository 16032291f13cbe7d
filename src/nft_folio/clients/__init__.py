"""API clients for NFT data providers"""

from .base import APIRequestError, BaseAPIClient
from .opensea import OpenSeaClient
from .alchemy import AlchemyClient
from .superrare import SuperRareClient

__all__ = ["APIRequestError", "BaseAPIClient", "OpenSeaClient", "AlchemyClient", "SuperRareClient"]
