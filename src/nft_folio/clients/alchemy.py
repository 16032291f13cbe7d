"""Alchemy NFT API client (wallet indexing)"""

from typing import Any, Dict, Optional

from .base import BaseAPIClient


class AlchemyClient(BaseAPIClient):
    """Alchemy NFT API v3 client"""

    source = "alchemy"

    BASE_URL = "https://eth-mainnet.g.alchemy.com/nft/v3"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        request_delay: float = 0.1,
        timeout: int = 30,
    ):
        # Alchemy authenticates with the key as a path segment
        super().__init__(f"{base_url.rstrip('/')}/{api_key}", api_key=api_key, request_delay=request_delay, timeout=timeout)

    async def get_minted_nfts(
        self,
        owner: str,
        page_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Get one page of NFTs minted by an address"""
        params: Dict[str, Any] = {"owner": owner}
        if page_key:
            params["pageKey"] = page_key

        response = await self._request("GET", "getMintedNfts", params=params)
        return {
            "nfts": response.get("nfts") or [],
            "pageKey": response.get("pageKey"),
        }
