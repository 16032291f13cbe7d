"""Normalize API responses to the canonical NFT record"""

from typing import Any, Dict, Optional

from loguru import logger
from pydantic import ValidationError

from .config import PLATFORM_CONTRACTS
from .models import NFT, MarketPrice, PriceQuote
from .utils import convert_ipfs_to_http, is_zero_address, normalize_address, opensea_asset_url


# Platform slug -> lower-cased contract addresses
PLATFORM_CONTRACT_INDEX: Dict[str, set] = {}
for _key, _address in PLATFORM_CONTRACTS.items():
    _platform = _key.split("-v")[0]
    PLATFORM_CONTRACT_INDEX.setdefault(_platform, set()).add(_address.lower())

PLATFORM_NAME_HINTS = {
    "superrare": "superrare",
    "knownorigin": "knownorigin",
    "known origin": "knownorigin",
    "makersplace": "makersplace",
    "async art": "async-art",
    "async-art": "async-art",
}


def _build(source: str, **fields: Any) -> Optional[NFT]:
    """Create an NFT, or None when the payload cannot form an identity"""
    if not fields.get("contract") or fields.get("identifier") in (None, ""):
        logger.debug(f"Skipping {source} item without contract/identifier")
        return None
    try:
        return NFT(**fields)
    except ValidationError as e:
        logger.debug(f"Skipping malformed {source} item: {e}")
        return None


def is_mint_event(event: Dict[str, Any]) -> bool:
    """
    A mint is an event typed ``mint`` or a transfer sent from the zero address.

    OpenSea reports mints either way depending on the endpoint, so both
    conditions identify the same on-chain fact.
    """
    if (event.get("event_type") or "").lower() == "mint":
        return True
    return is_zero_address(event.get("from_address"))


def platform_for(contract: str, collection_name: Optional[str] = None) -> Optional[str]:
    """Return the platform slug a token belongs to, if any"""
    contract = normalize_address(contract)
    for platform, addresses in PLATFORM_CONTRACT_INDEX.items():
        if contract in addresses:
            return platform

    name = (collection_name or "").lower()
    for hint, platform in PLATFORM_NAME_HINTS.items():
        if hint in name:
            return platform
    return None


class Normalizer:
    """Convert API-specific responses to NFT records"""

    @staticmethod
    def normalize_opensea_nft(
        data: Dict[str, Any],
        collection: Optional[str] = None,
    ) -> Optional[NFT]:
        """
        Normalize an OpenSea v2 NFT object.

        Args:
            data: the ``nft`` object from any OpenSea endpoint
            collection: grouping key to stamp; defaults to the source-reported slug
        """
        return _build(
            "opensea",
            identifier=data.get("identifier"),
            contract=data.get("contract"),
            collection=collection or data.get("collection") or "unknown",
            token_standard=data.get("token_standard"),
            name=data.get("name"),
            description=data.get("description"),
            image_url=data.get("image_url"),
            display_image_url=data.get("display_image_url"),
            marketplace_url=data.get("opensea_url"),
            updated_at=data.get("updated_at"),
        )

    @staticmethod
    def normalize_opensea_event(event: Dict[str, Any]) -> Optional[NFT]:
        """Extract the token embedded in an OpenSea asset event"""
        nft_data = event.get("nft")
        if not isinstance(nft_data, dict):
            return None
        return Normalizer.normalize_opensea_nft(nft_data)

    @staticmethod
    def normalize_alchemy_minted(data: Dict[str, Any], chain: str = "ethereum") -> Optional[NFT]:
        """Normalize an Alchemy v3 NFT (getMintedNfts item)"""
        contract = data.get("contract") or {}
        opensea_meta = contract.get("openSeaMetadata") or {}
        image = data.get("image") or {}
        raw_metadata = (data.get("raw") or {}).get("metadata") or {}

        address = contract.get("address") or ""
        token_id = data.get("tokenId")

        media_url = image.get("cachedUrl") or convert_ipfs_to_http(raw_metadata.get("image"))
        token_type = data.get("tokenType") or "ERC721"

        return _build(
            "alchemy",
            identifier=token_id,
            contract=address,
            collection=opensea_meta.get("collectionName") or contract.get("name") or "unknown",
            token_standard=token_type.lower(),
            name=data.get("name") or raw_metadata.get("name") or f"#{token_id}",
            description=data.get("description") or raw_metadata.get("description"),
            image_url=media_url,
            display_image_url=media_url,
            marketplace_url=opensea_asset_url(chain, address, str(token_id)) if address else "",
            updated_at=data.get("timeLastUpdated"),
        )

    @staticmethod
    def normalize_superrare_nft(
        data: Dict[str, Any],
        platform: str = "SuperRare",
        collection: str = "superrare",
    ) -> Optional[NFT]:
        """
        Normalize a SuperRare collectible.

        ``askPrice`` is the creator's current ask in wei; it becomes both the
        record's price and a market price tagged with ``platform``.
        """
        contract = data.get("contractAddress") or ""
        token_id = data.get("tokenId")
        image = convert_ipfs_to_http(data.get("image"))
        artwork_url = f"https://superrare.com/artwork/eth/{contract.lower()}/{token_id}" if contract else ""

        price = None
        market_prices = []
        ask = data.get("askPrice")
        if ask not in (None, "", "0", 0):
            try:
                price = PriceQuote.from_raw(ask, decimals=18, currency="ETH")
            except (TypeError, ValueError) as e:
                logger.debug(f"Ignoring unparseable SuperRare ask {ask!r}: {e}")
            else:
                market_prices.append(
                    MarketPrice(market=platform, amount=price.amount, currency=price.currency, url=artwork_url)
                )

        return _build(
            "superrare",
            identifier=token_id,
            contract=contract,
            collection=collection,
            token_standard="erc721",
            name=data.get("name"),
            description=data.get("description"),
            image_url=image,
            display_image_url=image,
            marketplace_url=opensea_asset_url("ethereum", contract, str(token_id)) if contract else "",
            superrare_url=artwork_url or None,
            updated_at=data.get("updatedAt"),
            price=price,
            market_prices=market_prices,
        )
