import asyncio

import aiohttp
import pytest

from nft_folio.clients import AlchemyClient, APIRequestError, OpenSeaClient, SuperRareClient


def _capture(client, response):
    calls = []

    async def fake_send(method, url, params=None, json_data=None, headers=None):
        calls.append({"method": method, "url": url, "params": params, "json": json_data})
        return response

    client._send = fake_send
    return calls


def test_request_wraps_transport_errors():
    client = OpenSeaClient(api_key="k", request_delay=0)

    async def failing_send(method, url, params=None, json_data=None, headers=None):
        raise aiohttp.ClientConnectionError("connection reset")

    client._send = failing_send

    with pytest.raises(APIRequestError) as exc:
        asyncio.run(client.get_nft("ethereum", "0xabc", "1"))

    assert exc.value.source == "opensea"
    assert "0xabc" in exc.value.url


def test_opensea_sends_api_key_header():
    assert OpenSeaClient(api_key="secret")._get_headers()["x-api-key"] == "secret"


def test_opensea_listings_repeat_token_ids():
    client = OpenSeaClient(api_key="k", request_delay=0)
    calls = _capture(client, {"orders": [{"side": "ask"}]})

    orders = asyncio.run(client.get_listings("0xabc", ["1", "2"]))

    assert orders == [{"side": "ask"}]
    assert calls[0]["url"].endswith("/orders/ethereum/seaport/listings")
    params = calls[0]["params"]
    assert ("asset_contract_address", "0xabc") in params
    assert [v for k, v in params if k == "token_ids"] == ["1", "2"]


def test_opensea_collection_page_shape():
    client = OpenSeaClient(api_key="k", request_delay=0)
    calls = _capture(client, {"nfts": [{"identifier": "1"}], "next": "abc"})

    page = asyncio.run(client.get_collection_nfts("glitch", cursor="xyz", limit=20))

    assert page == {"nfts": [{"identifier": "1"}], "next": "abc"}
    assert calls[0]["url"].endswith("/collection/glitch/nfts")
    assert calls[0]["params"]["next"] == "xyz"
    assert calls[0]["params"]["limit"] == 20


def test_alchemy_puts_key_in_path():
    client = AlchemyClient(api_key="alk", request_delay=0)
    calls = _capture(client, {"nfts": [], "pageKey": None})

    asyncio.run(client.get_minted_nfts("0xowner"))

    assert "/alk/getMintedNfts" in calls[0]["url"]
    assert calls[0]["params"]["owner"] == "0xowner"


def test_superrare_posts_creator_filter():
    client = SuperRareClient(request_delay=0)
    calls = _capture(client, {"result": {"collectibles": [{"tokenId": 1}]}})

    works = asyncio.run(client.get_creator_nfts("0xartist", ["0xsr"]))

    assert works == [{"tokenId": 1}]
    assert calls[0]["method"] == "POST"
    body = calls[0]["json"]
    assert body["creatorAddresses"] == ["0xartist"]
    assert body["contractAddresses"] == ["0xsr"]
