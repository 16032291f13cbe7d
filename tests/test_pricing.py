import asyncio

from nft_folio.pricing import PriceResolver, is_active_ask, reduce_orders

from conftest import WEI, ask_order


class FakeListingsClient:
    def __init__(self, orders_by_token=None, fail_contracts=(), fail_calls=()):
        self.orders_by_token = orders_by_token or {}
        self.fail_contracts = set(fail_contracts)
        self.fail_calls = set(fail_calls)
        self.calls = []

    async def get_listings(self, contract, token_ids, chain="ethereum"):
        self.calls.append((contract, list(token_ids)))
        if contract in self.fail_contracts or len(self.calls) in self.fail_calls:
            raise RuntimeError(f"listings unavailable for {contract}")
        orders = []
        for token_id in token_ids:
            orders.extend(self.orders_by_token.get(token_id, []))
        return orders


def test_minimum_active_ask_wins():
    prices = reduce_orders([
        ask_order("5", 2_000_000_000_000_000_000),
        ask_order("5", 1_500_000_000_000_000_000),
    ])

    assert prices["5"].amount == 1.5
    assert prices["5"].raw == "1500000000000000000"
    assert prices["5"].currency == "ETH"
    assert prices["5"].decimals == 18


def test_cancelled_and_finalized_orders_are_ignored():
    prices = reduce_orders([
        ask_order("1", 3 * WEI),
        ask_order("1", 1 * WEI, cancelled=True),
        ask_order("1", 2 * WEI, finalized=True),
        ask_order("1", WEI // 2, side="bid"),
    ])

    assert prices["1"].amount == 3.0


def test_token_with_only_inactive_orders_is_absent():
    prices = reduce_orders([
        ask_order("2", WEI, cancelled=True),
        ask_order("2", WEI, finalized=True),
    ])

    assert "2" not in prices
    assert prices == {}


def test_orders_without_asset_or_price_are_skipped():
    broken = ask_order("3", WEI)
    broken["maker_asset_bundle"] = {"assets": []}
    no_price = ask_order("4", WEI)
    no_price["current_price"] = None

    assert reduce_orders([broken, no_price]) == {}


def test_minimum_is_compared_exactly():
    # Both amounts collapse to the same float
    prices = reduce_orders([
        ask_order("7", 10 * WEI + 2),
        ask_order("7", 10 * WEI + 1),
    ])

    assert prices["7"].raw == str(10 * WEI + 1)


def test_eth_ask_beats_cheaper_looking_stablecoin_ask():
    orders = [
        ask_order("5", 3 * WEI // 2),
        ask_order("5", 1_000_000, decimals=6, symbol="USDC"),
        ask_order("6", 2_000_000, decimals=6, symbol="USDC"),
        ask_order("6", 1_500_000, decimals=6, symbol="USDC"),
    ]

    prices = reduce_orders(orders)

    assert prices["5"].currency == "ETH"
    assert prices["5"].amount == 1.5
    assert prices["6"].currency == "USDC"
    assert prices["6"].amount == 1.5


def test_weth_is_reported_as_eth():
    prices = reduce_orders([ask_order("8", WEI, symbol="WETH")])
    assert prices["8"].currency == "ETH"


def test_is_active_ask():
    assert is_active_ask(ask_order("1", WEI))
    assert not is_active_ask(ask_order("1", WEI, side="bid"))
    assert not is_active_ask(ask_order("1", WEI, cancelled=True))


def test_resolver_chunks_token_ids():
    client = FakeListingsClient({"31": [ask_order("31", WEI)]})
    resolver = PriceResolver(client, batch_size=30, batch_delay=0)
    token_ids = [str(i) for i in range(65)]

    prices = asyncio.run(resolver.resolve("0xaaa", token_ids))

    assert [len(ids) for _, ids in client.calls] == [30, 30, 5]
    assert client.calls[1][1][0] == "30"
    assert set(prices) == {"31"}


def test_resolver_failed_chunk_does_not_drop_other_chunks():
    client = FakeListingsClient(
        {"1": [ask_order("1", WEI)], "3": [ask_order("3", 2 * WEI)]},
        fail_calls={1},
    )
    resolver = PriceResolver(client, batch_size=2, batch_delay=0)

    prices = asyncio.run(resolver.resolve("0xaaa", ["1", "2", "3"]))

    assert "1" not in prices
    assert prices["3"].amount == 2.0


def test_resolver_failing_contract_yields_empty_mapping():
    client = FakeListingsClient({"1": [ask_order("1", WEI)]}, fail_contracts={"0xbad"})
    resolver = PriceResolver(client, batch_delay=0)

    assert asyncio.run(resolver.resolve("0xbad", ["1"])) == {}
