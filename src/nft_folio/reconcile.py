"""
Pure reconciliation stages

Each stage takes a sequence of records and returns a new sequence or mapping;
records are never mutated in place.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from .models import NFT, CollectionGroup, MarketPrice, PriceQuote

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Split ``items`` into consecutive lists of at most ``size`` elements"""
    size = max(1, size)
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def dedupe_nfts(records: Iterable[NFT]) -> List[NFT]:
    """Drop later records whose (contract, identifier) was already seen"""
    seen = set()
    unique: List[NFT] = []
    for nft in records:
        if nft.key in seen:
            continue
        seen.add(nft.key)
        unique.append(nft)
    return unique


def group_token_ids_by_contract(records: Iterable[NFT]) -> Dict[str, List[str]]:
    """Build the per-contract token id worklist, in discovery order"""
    contract_map: Dict[str, List[str]] = {}
    for nft in records:
        contract_map.setdefault(nft.contract, []).append(nft.identifier)
    return contract_map


def attach_price(nft: NFT, quote: PriceQuote, market: str, url: Optional[str] = None) -> NFT:
    """
    Return a copy of ``nft`` carrying ``quote`` from ``market``.

    ``price`` keeps the lowest quote seen; ``market_prices`` gets at most one
    entry per market, so attaching the same quote twice is a no-op.
    """
    price = nft.price
    if price is None or quote.is_better_than(price):
        price = quote

    market_prices = list(nft.market_prices)
    if not any(p.market == market for p in market_prices):
        market_prices.append(
            MarketPrice(
                market=market,
                amount=quote.amount,
                currency=quote.currency,
                url=url or nft.marketplace_url or None,
            )
        )

    if price is nft.price and len(market_prices) == len(nft.market_prices):
        return nft
    return nft.model_copy(update={"price": price, "market_prices": market_prices})


def apply_prices(
    records: Iterable[NFT],
    prices_by_contract: Mapping[str, Mapping[str, PriceQuote]],
    market: str,
) -> List[NFT]:
    """Attach resolved quotes to every record that has one"""
    priced: List[NFT] = []
    for nft in records:
        quote = prices_by_contract.get(nft.contract, {}).get(nft.identifier)
        priced.append(attach_price(nft, quote, market) if quote else nft)
    return priced


def group_by_collection(records: Iterable[NFT]) -> Dict[str, CollectionGroup]:
    """Bucket records by collection key; groups are created on first record"""
    buckets: Dict[str, List[NFT]] = {}
    for nft in records:
        buckets.setdefault(nft.collection, []).append(nft)

    return {
        slug: CollectionGroup(name=slug, slug=slug, nfts=nfts)
        for slug, nfts in buckets.items()
    }
