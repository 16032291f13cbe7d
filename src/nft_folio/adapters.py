"""
Source adapters

Each adapter answers one discovery question ("what is in this collection",
"what did this wallet mint", ...) and returns partially populated NFT records.
Failures are contained per target: a broken slug or wallet is logged and
skipped, the remaining targets still run.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from loguru import logger

from .clients import AlchemyClient, OpenSeaClient, SuperRareClient
from .models import NFT, ItemTarget
from .normalizer import Normalizer, is_mint_event, platform_for
from .pagination import Page, walk_pages


def _compact(records: Iterable[Optional[NFT]]) -> List[NFT]:
    return [r for r in records if r is not None]


class SourceAdapter(ABC):
    """Base class for discovery strategies"""

    name = "source"

    @abstractmethod
    async def fetch(self) -> List[NFT]:
        """Return records discovered by this strategy (prices usually unset)"""


class CollectionSlugAdapter(SourceAdapter):
    """Walk OpenSea collection listings by slug"""

    name = "collection"

    def __init__(
        self,
        client: Optional[OpenSeaClient],
        slugs: List[str],
        page_size: int = 50,
        max_pages: int = 5,
        page_delay: float = 0.2,
    ):
        self.client = client
        self.slugs = slugs
        self.page_size = page_size
        self.max_pages = max_pages
        self.page_delay = page_delay

    async def fetch_slug(self, slug: str) -> List[NFT]:
        """Fetch one collection, stamping every record with the configured slug"""
        async def fetch_page(cursor: Optional[str]) -> Page:
            response = await self.client.get_collection_nfts(slug, cursor=cursor, limit=self.page_size)
            records = _compact(
                Normalizer.normalize_opensea_nft(item, collection=slug)
                for item in response["nfts"]
            )
            return Page(records, response["next"])

        logger.info(f"[OpenSea] Fetching collection: {slug}...")
        nfts = await walk_pages(fetch_page, self.max_pages, self.page_delay, label=f"collection {slug}")
        logger.info(f"[OpenSea] Found {len(nfts)} NFTs in {slug}")
        return nfts

    async def fetch(self) -> List[NFT]:
        if not self.client:
            logger.warning("Skipping collection targets: OpenSea client not available")
            return []

        nfts: List[NFT] = []
        for slug in self.slugs:
            try:
                nfts.extend(await self.fetch_slug(slug))
            except Exception as e:
                logger.error(f"[OpenSea] Error fetching collection {slug}: {e}")
        return nfts


class SingleItemAdapter(SourceAdapter):
    """Fetch individually configured tokens"""

    name = "item"

    def __init__(self, client: Optional[OpenSeaClient], items: List[ItemTarget]):
        self.client = client
        self.items = items

    async def fetch(self) -> List[NFT]:
        if not self.client:
            logger.warning("Skipping item targets: OpenSea client not available")
            return []

        nfts: List[NFT] = []
        for item in self.items:
            try:
                data = await self.client.get_nft(item.chain, item.contract, item.token_id)
            except Exception as e:
                logger.error(f"[OpenSea] Error fetching single NFT {item.contract}/{item.token_id}: {e}")
                continue

            record = Normalizer.normalize_opensea_nft(data) if data else None
            if record:
                nfts.append(record)
            else:
                logger.warning(f"[OpenSea] No item returned for {item.contract}/{item.token_id}")
        return nfts


class WalletMintEventAdapter(SourceAdapter):
    """
    Discover creations from a wallet's mint events.

    Finds tokens the artist minted and has since sold, which holdings-based
    discovery cannot see.
    """

    name = "mint-events"

    def __init__(
        self,
        client: Optional[OpenSeaClient],
        wallets: List[str],
        page_size: int = 50,
        max_pages: int = 5,
        page_delay: float = 0.2,
    ):
        self.client = client
        self.wallets = wallets
        self.page_size = page_size
        self.max_pages = max_pages
        self.page_delay = page_delay

    async def fetch_wallet(self, wallet: str) -> List[NFT]:
        async def fetch_page(cursor: Optional[str]) -> Page:
            response = await self.client.get_account_events(
                wallet, cursor=cursor, event_type="transfer", limit=self.page_size
            )
            records = _compact(
                Normalizer.normalize_opensea_event(event)
                for event in response["asset_events"]
                if is_mint_event(event)
            )
            return Page(records, response["next"])

        nfts = await walk_pages(fetch_page, self.max_pages, self.page_delay, label=f"mint events {wallet}")
        logger.info(f"[OpenSea] Found {len(nfts)} mint events for {wallet}")
        return nfts

    async def fetch(self) -> List[NFT]:
        if not self.client:
            logger.warning("Skipping mint events: OpenSea client not available")
            return []

        nfts: List[NFT] = []
        for wallet in self.wallets:
            try:
                nfts.extend(await self.fetch_wallet(wallet))
            except Exception as e:
                logger.error(f"[OpenSea] Error fetching mint events for {wallet}: {e}")
        return nfts


class WalletOwnedAdapter(SourceAdapter):
    """Walk a wallet's current holdings"""

    name = "owned"

    def __init__(
        self,
        client: Optional[OpenSeaClient],
        wallets: List[str],
        chain: str = "ethereum",
        page_size: int = 50,
        max_pages: int = 5,
        page_delay: float = 0.2,
    ):
        self.client = client
        self.wallets = wallets
        self.chain = chain
        self.page_size = page_size
        self.max_pages = max_pages
        self.page_delay = page_delay

    async def fetch_wallet(self, wallet: str) -> List[NFT]:
        async def fetch_page(cursor: Optional[str]) -> Page:
            response = await self.client.get_account_nfts(
                wallet, chain=self.chain, cursor=cursor, limit=self.page_size
            )
            records = _compact(Normalizer.normalize_opensea_nft(item) for item in response["nfts"])
            return Page(records, response["next"])

        nfts = await walk_pages(fetch_page, self.max_pages, self.page_delay, label=f"holdings {wallet}")
        logger.info(f"[OpenSea] Found {len(nfts)} held NFTs for {wallet}")
        return nfts

    async def fetch(self) -> List[NFT]:
        if not self.client:
            logger.warning("Skipping wallet holdings: OpenSea client not available")
            return []

        nfts: List[NFT] = []
        for wallet in self.wallets:
            try:
                nfts.extend(await self.fetch_wallet(wallet))
            except Exception as e:
                logger.error(f"[OpenSea] Error fetching holdings for {wallet}: {e}")
        return nfts


class WalletMintedTokenAdapter(SourceAdapter):
    """
    Enumerate tokens minted by a wallet through the wallet-indexing API and
    keep the ones living on known creator platforms.

    Matching records are re-keyed to the platform slug ("superrare",
    "knownorigin", ...) so works spread over shared contracts group together.
    """

    name = "minted"

    def __init__(
        self,
        client: Optional[AlchemyClient],
        wallets: List[str],
        max_pages: int = 20,
        page_delay: float = 0.1,
    ):
        self.client = client
        self.wallets = wallets
        self.max_pages = max_pages
        self.page_delay = page_delay

    async def fetch_wallet(self, wallet: str) -> List[NFT]:
        async def fetch_page(cursor: Optional[str]) -> Page:
            response = await self.client.get_minted_nfts(wallet, page_key=cursor)
            records = _compact(Normalizer.normalize_alchemy_minted(item) for item in response["nfts"])
            return Page(records, response["pageKey"])

        logger.info(f"[Alchemy] Fetching minted NFTs for {wallet}...")
        minted = await walk_pages(fetch_page, self.max_pages, self.page_delay, label=f"minted {wallet}")

        relevant = []
        for nft in minted:
            platform = platform_for(nft.contract, nft.collection)
            if platform:
                relevant.append(nft.model_copy(update={"collection": platform}))

        logger.info(f"[Alchemy] Found {len(relevant)} relevant platform items out of {len(minted)} for {wallet}")
        return relevant

    async def fetch(self) -> List[NFT]:
        if not self.client:
            logger.warning("Skipping Alchemy fetch: No API Key provided.")
            return []

        nfts: List[NFT] = []
        for wallet in self.wallets:
            try:
                nfts.extend(await self.fetch_wallet(wallet))
            except Exception as e:
                logger.error(f"[Alchemy] Error fetching for {wallet}: {e}")
        return nfts


class PlatformNativeAdapter(SourceAdapter):
    """Query a platform's own creator endpoint for a known contract set"""

    name = "platform"

    def __init__(
        self,
        client: Optional[SuperRareClient],
        creator: Optional[str],
        contracts: List[str],
        platform: str = "SuperRare",
        collection: str = "superrare",
    ):
        self.client = client
        self.creator = creator
        self.contracts = contracts
        self.platform = platform
        self.collection = collection

    async def fetch(self) -> List[NFT]:
        if not self.client or not self.creator:
            logger.warning(f"Skipping {self.platform}: client or creator not configured")
            return []

        try:
            items = await self.client.get_creator_nfts(self.creator, self.contracts)
        except Exception as e:
            logger.error(f"[{self.platform}] Error fetching works for {self.creator}: {e}")
            return []

        nfts = _compact(
            Normalizer.normalize_superrare_nft(item, platform=self.platform, collection=self.collection)
            for item in items
        )
        logger.info(f"[{self.platform}] Found {len(nfts)} works for {self.creator}")
        return nfts
