"""
Configuration management for NFT Folio
"""

import os
from typing import Dict, List, Optional
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger

from .utils import validate_ethereum_address

# Load environment variables
PROJECT_ROOT = Path(__file__).parent.parent.parent
env_path = PROJECT_ROOT / ".env"
load_dotenv(env_path)


# Wallets the artist has minted from
DEFAULT_WALLET_ADDRESSES = [
    "0x72774bc572ef9a2dFF47c3F8Cc200DC2fe3830C0",
]

# Platform contracts hosting many creators' work
PLATFORM_CONTRACTS: Dict[str, str] = {
    "superrare-v1": "0x41A322b28D0fF354040e2CbC676F0320d8c8850d",
    "superrare-v2": "0xb932a70A57673d89f4acfFBE830E8ed7f75Fb9e0",
    "knownorigin": "0xFBeef911Dc5821886e1dda71586D90eD28174B7d",
    "makersplace": "0x2a46f2ffd99e19a89476e2f62270e0a35bbf0756",
    "async-art": "0xb6dae651468e9593e4581705a09c10a76ac1e0c8",
}


@dataclass
class APIConfig:
    """API configuration for a provider"""
    base_url: str
    api_key: Optional[str] = None
    request_delay: float = 0.2  # seconds between requests


@dataclass
class Config:
    """Main configuration class"""

    opensea_api_key: Optional[str] = None
    alchemy_api_key: Optional[str] = None
    superrare_api_key: Optional[str] = None

    wallet_addresses: List[str] = field(default_factory=lambda: list(DEFAULT_WALLET_ADDRESSES))
    superrare_creator: Optional[str] = None

    opensea_base_url: str = "https://api.opensea.io/api/v2"
    alchemy_base_url: str = "https://eth-mainnet.g.alchemy.com/nft/v3"
    superrare_base_url: str = "https://api.superrare.com/api/v2"

    # Input / output files
    targets_path: Path = PROJECT_ROOT / "config" / "targets.json"
    collections_path: Path = PROJECT_ROOT / "config" / "collections.json"
    snapshot_path: Path = PROJECT_ROOT / "data" / "nfts.json"

    # Pagination
    page_size: int = 50
    max_pages: int = 5
    page_delay: float = 0.2

    # Listings
    listings_batch_size: int = 30
    listings_delay: float = 0.5
    contract_batch_size: int = 5
    contract_batch_delay: float = 1.0

    # Discovery
    include_mint_events: bool = True
    include_holdings: bool = False

    # Request settings
    timeout: int = 30

    # Cache settings
    cache_ttl: int = 900  # 15 minutes

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""

        def get_list(key_name: str) -> List[str]:
            """Get a comma-separated list"""
            value = os.getenv(key_name, "")
            if not value:
                return []
            return [v.strip() for v in value.split(",") if v.strip()]

        def get_path(key_name: str, default: Path) -> Path:
            value = os.getenv(key_name)
            return Path(value) if value else default

        wallets = []
        for address in get_list("WALLET_ADDRESSES"):
            is_valid, checksum = validate_ethereum_address(address)
            if is_valid:
                wallets.append(checksum)
            else:
                logger.warning(f"Ignoring invalid wallet address: {address}")
        wallets = wallets or list(DEFAULT_WALLET_ADDRESSES)

        return cls(
            opensea_api_key=os.getenv("OPENSEA_API_KEY") or None,
            alchemy_api_key=os.getenv("ALCHEMY_API_KEY") or None,
            superrare_api_key=os.getenv("SUPERRARE_API_KEY") or None,
            wallet_addresses=wallets,
            superrare_creator=os.getenv("SUPERRARE_CREATOR") or wallets[0],
            targets_path=get_path("TARGETS_FILE", cls.targets_path),
            collections_path=get_path("COLLECTIONS_FILE", cls.collections_path),
            snapshot_path=get_path("SNAPSHOT_PATH", cls.snapshot_path),
            page_size=int(os.getenv("PAGE_SIZE", "50")),
            max_pages=int(os.getenv("MAX_PAGES", "5")),
            page_delay=float(os.getenv("PAGE_DELAY", "0.2")),
            listings_batch_size=int(os.getenv("LISTINGS_BATCH_SIZE", "30")),
            listings_delay=float(os.getenv("LISTINGS_DELAY", "0.5")),
            contract_batch_size=int(os.getenv("CONTRACT_BATCH_SIZE", "5")),
            contract_batch_delay=float(os.getenv("CONTRACT_BATCH_DELAY", "1.0")),
            include_mint_events=os.getenv("INCLUDE_MINT_EVENTS", "true").lower() in ("1", "true", "yes"),
            include_holdings=os.getenv("INCLUDE_HOLDINGS", "false").lower() in ("1", "true", "yes"),
            timeout=int(os.getenv("TIMEOUT", "30")),
            cache_ttl=int(os.getenv("CACHE_TTL", "900")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def get_opensea_config(self) -> APIConfig:
        """Get OpenSea API config"""
        if not self.opensea_api_key:
            raise ValueError("OpenSea API key not configured")
        return APIConfig(
            base_url=self.opensea_base_url,
            api_key=self.opensea_api_key,
            request_delay=self.page_delay,
        )

    def get_alchemy_config(self) -> APIConfig:
        """Get Alchemy API config"""
        if not self.alchemy_api_key:
            raise ValueError("Alchemy API key not configured")
        return APIConfig(
            base_url=self.alchemy_base_url,
            api_key=self.alchemy_api_key,
            request_delay=0.1,
        )

    def get_superrare_config(self) -> APIConfig:
        """Get SuperRare API config (key is optional)"""
        return APIConfig(
            base_url=self.superrare_base_url,
            api_key=self.superrare_api_key,
            request_delay=0.5,
        )


# Global config instance
config = Config.from_env()
