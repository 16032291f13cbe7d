"""
Reconciliation engine: runs every discovery strategy, deduplicates, prices
and groups the artist's works.
"""

import asyncio
import json
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from .adapters import (
    CollectionSlugAdapter,
    PlatformNativeAdapter,
    SingleItemAdapter,
    SourceAdapter,
    WalletMintEventAdapter,
    WalletMintedTokenAdapter,
    WalletOwnedAdapter,
)
from .clients import AlchemyClient, OpenSeaClient, SuperRareClient
from .config import PLATFORM_CONTRACTS, Config, config
from .models import NFT, CollectionGroup, CollectionTarget, ItemTarget, PriceQuote, Target
from .pricing import PriceResolver
from .reconcile import apply_prices, chunked, dedupe_nfts, group_by_collection, group_token_ids_by_contract

_targets_adapter = TypeAdapter(List[Target])

SUPERRARE_CONTRACTS = [PLATFORM_CONTRACTS["superrare-v1"], PLATFORM_CONTRACTS["superrare-v2"]]


def load_targets(path: Path) -> List[Target]:
    """Load discovery targets from a JSON array; a missing or invalid file yields none"""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Targets file {path} not found, only wallet discovery will run")
        return []
    try:
        return _targets_adapter.validate_python(json.loads(path.read_text(encoding="utf-8")))
    except (ValueError, ValidationError) as e:
        logger.error(f"Invalid targets file {path}: {e}")
        return []


class NFTAggregator:
    """Aggregate one artist's works across marketplaces and wallets"""

    def __init__(
        self,
        config_instance: Optional[Config] = None,
        targets: Optional[List[Target]] = None,
    ):
        self.config = config_instance or config
        self.targets = targets if targets is not None else load_targets(self.config.targets_path)

        self.opensea: Optional[OpenSeaClient] = None
        self.alchemy: Optional[AlchemyClient] = None
        self.superrare: Optional[SuperRareClient] = None
        self.resolver: Optional[PriceResolver] = None

        self._initialize_clients()

    def _initialize_clients(self):
        """Initialize API clients; a missing key disables the sources that need it"""
        try:
            opensea_config = self.config.get_opensea_config()
            self.opensea = OpenSeaClient(
                api_key=opensea_config.api_key,
                base_url=opensea_config.base_url,
                request_delay=opensea_config.request_delay,
                timeout=self.config.timeout,
            )
            self.resolver = PriceResolver(
                self.opensea,
                batch_size=self.config.listings_batch_size,
                batch_delay=self.config.listings_delay,
            )
            logger.info("OpenSea client initialized")
        except ValueError as e:
            logger.warning(f"OpenSea client not available: {e}")

        try:
            alchemy_config = self.config.get_alchemy_config()
            self.alchemy = AlchemyClient(
                api_key=alchemy_config.api_key,
                base_url=alchemy_config.base_url,
                request_delay=alchemy_config.request_delay,
                timeout=self.config.timeout,
            )
            logger.info("Alchemy client initialized")
        except ValueError as e:
            logger.warning(f"Alchemy client not available: {e}")

        superrare_config = self.config.get_superrare_config()
        self.superrare = SuperRareClient(
            api_key=superrare_config.api_key,
            base_url=superrare_config.base_url,
            request_delay=superrare_config.request_delay,
            timeout=self.config.timeout,
        )
        logger.info("SuperRare client initialized")

    def build_adapters(self) -> List[SourceAdapter]:
        """
        Adapters in run order. Earlier adapters win ties during deduplication,
        so configured targets come before wallet-wide discovery.
        """
        cfg = self.config
        slugs = [t.slug for t in self.targets if isinstance(t, CollectionTarget)]
        items = [t for t in self.targets if isinstance(t, ItemTarget)]
        paging = dict(page_size=cfg.page_size, max_pages=cfg.max_pages, page_delay=cfg.page_delay)

        adapters: List[SourceAdapter] = [
            CollectionSlugAdapter(self.opensea, slugs, **paging),
            SingleItemAdapter(self.opensea, items),
            PlatformNativeAdapter(
                self.superrare,
                cfg.superrare_creator,
                SUPERRARE_CONTRACTS,
                platform="SuperRare",
                collection="superrare",
            ),
            WalletMintedTokenAdapter(self.alchemy, cfg.wallet_addresses),
        ]
        if cfg.include_mint_events:
            adapters.append(WalletMintEventAdapter(self.opensea, cfg.wallet_addresses, **paging))
        if cfg.include_holdings:
            adapters.append(WalletOwnedAdapter(self.opensea, cfg.wallet_addresses, **paging))
        return adapters

    async def collect(self, adapters: List[SourceAdapter]) -> List[NFT]:
        """Run adapters one after another and concatenate their records"""
        records: List[NFT] = []
        for adapter in adapters:
            try:
                found = await adapter.fetch()
            except Exception as e:
                logger.error(f"Source {adapter.name} failed: {e}")
                continue
            logger.info(f"Source {adapter.name} returned {len(found)} records")
            records.extend(found)
        return records

    async def backfill_images(self, records: List[NFT]) -> List[NFT]:
        """Fill missing images from OpenSea's single-item endpoint"""
        missing = [nft for nft in records if not nft.image_url]
        if not missing or not self.opensea:
            return records

        logger.info(f"Found {len(missing)} items with missing images. Fetching from OpenSea...")
        updates: Dict[str, NFT] = {}
        for nft in missing:
            try:
                data = await self.opensea.get_nft("ethereum", nft.contract, nft.identifier)
            except Exception as e:
                logger.error(f"Failed to fetch image for {nft.key}: {e}")
                continue
            if not data:
                continue

            image = data.get("image_url") or data.get("display_image_url") or ""
            display = data.get("display_image_url") or data.get("image_url") or ""
            if image:
                updates[nft.key] = nft.model_copy(update={"image_url": image, "display_image_url": display})
                logger.debug(f"Updated image for {nft.name or nft.key}")

        return [updates.get(nft.key, nft) for nft in records]

    async def resolve_prices(self, records: List[NFT]) -> Dict[str, Dict[str, PriceQuote]]:
        """
        Resolve listings per contract, ``contract_batch_size`` contracts at a
        time with a pause between batches.
        """
        if not self.resolver:
            logger.warning("Skipping price resolution: OpenSea client not available")
            return {}

        contract_map = group_token_ids_by_contract(records)
        batches = chunked(list(contract_map.items()), self.config.contract_batch_size)
        prices: Dict[str, Dict[str, PriceQuote]] = {}

        logger.info(f"Fetching prices for {len(contract_map)} contracts...")
        for index, batch in enumerate(batches):
            results = await asyncio.gather(
                *[self.resolver.resolve(contract, token_ids) for contract, token_ids in batch],
                return_exceptions=True,
            )
            for (contract, token_ids), result in zip(batch, results):
                if isinstance(result, Exception):
                    logger.error(f"Failed to fetch listings for contract {contract}: {result}")
                    continue
                logger.info(f"Contract {contract}: {len(result)} of {len(token_ids)} items listed")
                prices[contract] = result

            if index + 1 < len(batches):
                await asyncio.sleep(self.config.contract_batch_delay)

        return prices

    async def run(self) -> Dict[str, CollectionGroup]:
        """Run the whole pipeline and return collection slug -> group"""
        records = await self.collect(self.build_adapters())
        unique = dedupe_nfts(records)
        logger.info(f"Collected {len(records)} records, {len(unique)} unique")

        unique = await self.backfill_images(unique)

        prices = await self.resolve_prices(unique)
        priced = apply_prices(unique, prices, market=PriceResolver.market)

        grouped = group_by_collection(priced)
        logger.info(f"✅ Aggregated {len(priced)} NFTs into {len(grouped)} collections")
        return grouped


async def aggregate(config_instance: Optional[Config] = None) -> Dict[str, CollectionGroup]:
    """Pipeline entry point: grouped, deduplicated and priced works"""
    return await NFTAggregator(config_instance).run()
