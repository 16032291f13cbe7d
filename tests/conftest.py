"""Shared fixtures for NFT Folio tests."""

import sys
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

import pytest

from nft_folio.config import Config
from nft_folio.models import NFT


WEI = 10 ** 18


@pytest.fixture
def cfg(tmp_path):
    """Config with fake keys, no pacing and files under tmp_path."""
    return Config(
        opensea_api_key="test-opensea",
        alchemy_api_key=None,
        wallet_addresses=["0x72774bc572ef9a2dff47c3f8cc200dc2fe3830c0"],
        superrare_creator="0x72774bc572ef9a2dff47c3f8cc200dc2fe3830c0",
        targets_path=tmp_path / "targets.json",
        collections_path=tmp_path / "collections.json",
        snapshot_path=tmp_path / "data" / "nfts.json",
        page_delay=0,
        listings_delay=0,
        contract_batch_delay=0,
    )


def make_nft(contract="0xa", identifier="1", collection="x", **fields):
    return NFT(contract=contract, identifier=identifier, collection=collection, **fields)


def opensea_item(contract="0xaaa", identifier="1", collection="source-slug", **fields):
    """A realistic OpenSea v2 ``nft`` object."""
    item = {
        "identifier": identifier,
        "collection": collection,
        "contract": contract,
        "token_standard": "erc721",
        "name": f"Work #{identifier}",
        "description": "glitch study",
        "image_url": f"https://i.seadn.io/{identifier}.png",
        "display_image_url": f"https://i.seadn.io/{identifier}.png?w=500",
        "opensea_url": f"https://opensea.io/assets/ethereum/{contract}/{identifier}",
        "updated_at": "2024-01-02T03:04:05.000000",
    }
    item.update(fields)
    return item


def ask_order(token_id, wei, side="ask", cancelled=False, finalized=False, decimals=18, symbol="ETH"):
    """A Seaport order as returned by the listings endpoint."""
    return {
        "side": side,
        "cancelled": cancelled,
        "finalized": finalized,
        "current_price": str(wei),
        "maker_asset_bundle": {"assets": [{"token_id": str(token_id), "decimals": 0}]},
        "taker_asset_bundle": {
            "assets": [{"decimals": decimals, "asset_contract": {"symbol": symbol}}]
        },
    }
