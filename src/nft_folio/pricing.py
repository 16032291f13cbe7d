"""Resolve the cheapest active ask per token from marketplace listings"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from .clients import OpenSeaClient
from .models import PriceQuote
from .reconcile import chunked

DEFAULT_DECIMALS = 18


def _order_token_id(order: Dict[str, Any]) -> Optional[str]:
    assets = (order.get("maker_asset_bundle") or {}).get("assets") or []
    if not assets:
        return None
    token_id = assets[0].get("token_id")
    return str(token_id) if token_id is not None else None


def _order_payment(order: Dict[str, Any]) -> Dict[str, Any]:
    """Payment asset of the order (what the buyer pays)"""
    assets = (order.get("taker_asset_bundle") or {}).get("assets") or []
    return assets[0] if assets else {}


def is_active_ask(order: Dict[str, Any]) -> bool:
    """Sell-side order that is neither cancelled nor finalized"""
    return order.get("side") == "ask" and not order.get("cancelled") and not order.get("finalized")


def reduce_orders(orders: Iterable[Dict[str, Any]]) -> Dict[str, PriceQuote]:
    """
    Reduce raw orders to the best active ask per token id: an ETH (or WETH)
    ask wins over other currencies, then the lower amount.

    Orders that are not active asks, or that lack a token or price, are ignored.
    """
    price_map: Dict[str, PriceQuote] = {}

    for order in orders:
        if not is_active_ask(order):
            continue

        token_id = _order_token_id(order)
        raw_price = order.get("current_price")
        if token_id is None or raw_price in (None, ""):
            continue

        payment = _order_payment(order)
        decimals = payment.get("decimals")
        if decimals is None:
            decimals = DEFAULT_DECIMALS
        symbol = ((payment.get("asset_contract") or {}).get("symbol") or "ETH").upper()
        currency = "ETH" if symbol in ("ETH", "WETH") else symbol

        try:
            quote = PriceQuote.from_raw(raw_price, decimals=int(decimals), currency=currency)
        except (TypeError, ValueError) as e:
            logger.debug(f"Skipping order with unparseable price {raw_price!r}: {e}")
            continue

        current = price_map.get(token_id)
        if current is None or quote.is_better_than(current):
            price_map[token_id] = quote

    return price_map


class PriceResolver:
    """Look up active listings for one contract at a time"""

    market = "OpenSea"

    def __init__(
        self,
        client: OpenSeaClient,
        batch_size: int = 30,
        batch_delay: float = 0.5,
        chain: str = "ethereum",
    ):
        self.client = client
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.chain = chain

    async def resolve(self, contract: str, token_ids: List[str]) -> Dict[str, PriceQuote]:
        """
        Map token id -> cheapest active ask for tokens on ``contract``.

        Token ids are queried in chunks of ``batch_size``; a failing chunk is
        logged and contributes nothing.
        """
        orders: List[Dict[str, Any]] = []
        batches = chunked(token_ids, self.batch_size)

        for index, batch in enumerate(batches):
            try:
                orders.extend(await self.client.get_listings(contract, batch, chain=self.chain))
            except Exception as e:
                logger.error(f"Error fetching listings for contract {contract}: {e}")

            if index + 1 < len(batches):
                await asyncio.sleep(self.batch_delay)

        prices = reduce_orders(orders)
        logger.debug(f"Resolved {len(prices)} listed tokens out of {len(token_ids)} on {contract}")
        return prices
