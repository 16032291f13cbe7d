"""Base client with retry logic and request pacing"""

import asyncio
import time
from typing import Any, Dict, List, Optional, Tuple, Union
import aiohttp
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from loguru import logger


QueryParams = Union[Dict[str, Any], List[Tuple[str, Any]]]


class APIRequestError(Exception):
    """A request to an upstream API failed after retries"""

    def __init__(self, source: str, url: str, message: str, status: Optional[int] = None):
        self.source = source
        self.url = url
        self.status = status
        super().__init__(f"{source} request to {url} failed: {message}")


class BaseAPIClient:
    """Base class for API clients with retry logic and fixed request pacing"""

    source = "api"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        request_delay: float = 0.2,
        timeout: int = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.request_delay = request_delay
        self.timeout = timeout
        self._pacing_lock = asyncio.Lock()
        self._last_request_time = 0.0

    def _get_headers(self) -> Dict[str, str]:
        """Default request headers, overridden by clients that send a key"""
        return {"Accept": "application/json"}

    async def _apply_rate_limit(self):
        """Keep at least ``request_delay`` seconds between requests"""
        async with self._pacing_lock:
            time_since_last = time.monotonic() - self._last_request_time
            if time_since_last < self.request_delay:
                await asyncio.sleep(self.request_delay - time_since_last)
            self._last_request_time = time.monotonic()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
        reraise=True,
    )
    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[QueryParams] = None,
        json_data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make HTTP request with retry logic"""
        await self._apply_rate_limit()

        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
            async with session.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                headers=headers,
            ) as response:
                if response.status == 429:  # Rate limited
                    logger.warning(f"{self.source} rate limited, backing off")
                    await asyncio.sleep(5)
                    raise aiohttp.ClientResponseError(
                        request_info=response.request_info,
                        history=response.history,
                        status=429,
                    )

                response.raise_for_status()
                return await response.json()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[QueryParams] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a paced request and return parsed JSON or raise APIRequestError"""
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = {"Content-Type": "application/json"}
        headers.update(self._get_headers())

        try:
            return await self._send(method, url, params=params, json_data=json_data, headers=headers)
        except aiohttp.ClientResponseError as e:
            raise APIRequestError(self.source, url, e.message or str(e), status=e.status) from e
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise APIRequestError(self.source, url, f"{type(e).__name__}: {e}") from e
