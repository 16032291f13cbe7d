"""
OpenSea API v2 client
Collection listings, single items, account events, account holdings and
active listings. Every paginated endpoint uses the same ``next`` cursor.
"""

from typing import Any, Dict, List, Optional, Tuple

from .base import BaseAPIClient


class OpenSeaClient(BaseAPIClient):
    """OpenSea API v2 client"""

    source = "opensea"

    BASE_URL = "https://api.opensea.io/api/v2"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        request_delay: float = 0.2,
        timeout: int = 30,
    ):
        super().__init__(base_url, api_key=api_key, request_delay=request_delay, timeout=timeout)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "Accept": "application/json",
        }

    async def get_collection_nfts(
        self,
        slug: str,
        cursor: Optional[str] = None,
        limit: int = 50,
    ) -> Dict[str, Any]:
        """Get one page of NFTs in a collection"""
        params: Dict[str, Any] = {"limit": limit}
        if cursor:
            params["next"] = cursor

        response = await self._request("GET", f"collection/{slug}/nfts", params=params)
        return {
            "nfts": response.get("nfts") or [],
            "next": response.get("next"),
        }

    async def get_nft(self, chain: str, contract: str, token_id: str) -> Optional[Dict[str, Any]]:
        """Get a single NFT, None when the response carries no item"""
        response = await self._request("GET", f"chain/{chain}/contract/{contract}/nfts/{token_id}")
        return response.get("nft")

    async def get_account_events(
        self,
        address: str,
        cursor: Optional[str] = None,
        event_type: str = "transfer",
        limit: int = 50,
    ) -> Dict[str, Any]:
        """Get one page of an account's asset events"""
        params: Dict[str, Any] = {"event_type": event_type, "limit": limit}
        if cursor:
            params["next"] = cursor

        response = await self._request("GET", f"events/accounts/{address}", params=params)
        return {
            "asset_events": response.get("asset_events") or [],
            "next": response.get("next"),
        }

    async def get_account_nfts(
        self,
        address: str,
        chain: str = "ethereum",
        cursor: Optional[str] = None,
        limit: int = 50,
    ) -> Dict[str, Any]:
        """Get one page of NFTs currently held by an account"""
        params: Dict[str, Any] = {"limit": limit}
        if cursor:
            params["next"] = cursor

        response = await self._request("GET", f"chain/{chain}/account/{address}/nfts", params=params)
        return {
            "nfts": response.get("nfts") or [],
            "next": response.get("next"),
        }

    async def get_listings(
        self,
        contract: str,
        token_ids: List[str],
        chain: str = "ethereum",
    ) -> List[Dict[str, Any]]:
        """Get active Seaport orders for a batch of tokens on one contract"""
        params: List[Tuple[str, Any]] = [("asset_contract_address", contract)]
        params.extend(("token_ids", token_id) for token_id in token_ids)

        response = await self._request("GET", f"orders/{chain}/seaport/listings", params=params)
        return response.get("orders") or []
