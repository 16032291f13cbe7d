"""
SuperRare API client
Queries the platform's own creator endpoint, which answers "all works by this
creator on these contracts" without scanning the shared platform contracts.
"""

from typing import Any, Dict, List, Optional

from .base import BaseAPIClient


class SuperRareClient(BaseAPIClient):
    """SuperRare creator API client"""

    source = "superrare"

    BASE_URL = "https://api.superrare.com/api/v2"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = BASE_URL,
        request_delay: float = 0.5,
        timeout: int = 30,
    ):
        super().__init__(base_url, api_key=api_key, request_delay=request_delay, timeout=timeout)

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-KEY"] = self.api_key
        return headers

    async def get_creator_nfts(
        self,
        creator: str,
        contracts: List[str],
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        """Get every work by ``creator`` on the allowed contracts"""
        body = {
            "creatorAddresses": [creator.lower()],
            "contractAddresses": [c.lower() for c in contracts],
            "offset": 0,
            "limit": limit,
        }
        response = await self._request("POST", "nft/get-by-market-details", json_data=body)
        result = response.get("result") or {}
        return result.get("collectibles") or []
