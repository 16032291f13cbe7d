"""In-memory stand-ins for the upstream API clients."""

from nft_folio.clients import APIRequestError


class FakeOpenSea:
    """Serves pages from dicts keyed by slug / wallet; listed keys fail."""

    def __init__(
        self,
        collections=None,
        items=None,
        events=None,
        holdings=None,
        orders=None,
        failing=(),
    ):
        self.collections = collections or {}
        self.items = items or {}
        self.events = events or {}
        self.holdings = holdings or {}
        self.orders = orders or {}
        self.failing = set(failing)
        self.calls = []

    def _check(self, key):
        self.calls.append(key)
        if key in self.failing:
            raise APIRequestError("opensea", f"https://api.opensea.io/{key}", "Service Unavailable", status=503)

    @staticmethod
    def _page(pages, cursor):
        index = int(cursor) if cursor else 0
        next_cursor = str(index + 1) if index + 1 < len(pages) else None
        return pages[index], next_cursor

    async def get_collection_nfts(self, slug, cursor=None, limit=50):
        self._check(slug)
        nfts, next_cursor = self._page(self.collections.get(slug, [[]]), cursor)
        return {"nfts": nfts, "next": next_cursor}

    async def get_nft(self, chain, contract, token_id):
        self._check(f"{contract}/{token_id}")
        return self.items.get((contract.lower(), str(token_id)))

    async def get_account_events(self, address, cursor=None, event_type="transfer", limit=50):
        self._check(f"events:{address}")
        events, next_cursor = self._page(self.events.get(address, [[]]), cursor)
        return {"asset_events": events, "next": next_cursor}

    async def get_account_nfts(self, address, chain="ethereum", cursor=None, limit=50):
        self._check(f"holdings:{address}")
        nfts, next_cursor = self._page(self.holdings.get(address, [[]]), cursor)
        return {"nfts": nfts, "next": next_cursor}

    async def get_listings(self, contract, token_ids, chain="ethereum"):
        self._check(f"listings:{contract}")
        orders = self.orders.get(contract, {})
        return [order for token_id in token_ids for order in orders.get(token_id, [])]


class FakeAlchemy:
    def __init__(self, minted=None, failing=()):
        self.minted = minted or {}
        self.failing = set(failing)

    async def get_minted_nfts(self, owner, page_key=None):
        if owner in self.failing:
            raise APIRequestError("alchemy", "https://eth-mainnet.g.alchemy.com", "timeout")
        return {"nfts": self.minted.get(owner, []), "pageKey": None}


class FakeSuperRare:
    def __init__(self, works=None, fail=False):
        self.works = works or []
        self.fail = fail
        self.calls = []

    async def get_creator_nfts(self, creator, contracts, limit=500):
        self.calls.append((creator, list(contracts)))
        if self.fail:
            raise APIRequestError("superrare", "https://api.superrare.com", "Bad Gateway", status=502)
        return self.works
