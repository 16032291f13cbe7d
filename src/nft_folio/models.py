"""
Normalized Pydantic models for aggregated NFT data
"""

from decimal import Decimal
from typing import Annotated, Optional, List, Union, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PriceQuote(BaseModel):
    """Best ask for a token. ``raw`` is the source of truth, ``amount`` is for display."""

    model_config = ConfigDict(frozen=True)

    amount: float
    currency: str = "ETH"
    decimals: int = 18
    raw: str

    @classmethod
    def from_raw(cls, raw: Union[str, int], decimals: int = 18, currency: str = "ETH") -> "PriceQuote":
        """Build a quote from an integer amount in minor units (wei for ETH)"""
        raw_str = str(int(raw))
        amount = Decimal(raw_str) / (Decimal(10) ** decimals)
        return cls(amount=float(amount), currency=currency, decimals=decimals, raw=raw_str)

    @property
    def exact_amount(self) -> Decimal:
        return Decimal(self.raw) / (Decimal(10) ** self.decimals)

    def is_better_than(self, other: "PriceQuote") -> bool:
        """ETH quotes win over other currencies, otherwise the cheaper one"""
        if self.currency != other.currency:
            return self.currency == "ETH"
        return self.exact_amount < other.exact_amount


class MarketPrice(BaseModel):
    """Price observation from one marketplace"""

    model_config = ConfigDict(frozen=True)

    market: str
    amount: float
    currency: str = "ETH"
    url: Optional[str] = None


class NFT(BaseModel):
    """Canonical NFT record shared by every source"""

    model_config = ConfigDict(frozen=True)

    # Identity
    identifier: str
    contract: str

    # Grouping key (collection slug or platform name)
    collection: str

    token_standard: str = ""
    name: str = ""
    description: str = ""

    # Media
    image_url: str = ""
    display_image_url: str = ""

    # Links
    marketplace_url: str = ""
    superrare_url: Optional[str] = None

    updated_at: Optional[str] = None

    # Pricing
    price: Optional[PriceQuote] = None
    market_prices: List[MarketPrice] = Field(default_factory=list)

    @field_validator("identifier", mode="before")
    @classmethod
    def _identifier_as_string(cls, value):
        # Token ids can exceed float precision, keep them as decimal strings
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("contract", mode="before")
    @classmethod
    def _normalize_contract(cls, value):
        if value is None:
            return ""
        return str(value).strip().lower()

    @field_validator(
        "collection",
        "token_standard",
        "name",
        "description",
        "image_url",
        "display_image_url",
        "marketplace_url",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def key(self) -> str:
        """Identity key: ``contract-identifier``"""
        return f"{self.contract}-{self.identifier}"


class CollectionGroup(BaseModel):
    """NFTs sharing a collection key"""

    name: str
    slug: str
    nfts: List[NFT] = Field(default_factory=list)


class CollectionDisplay(BaseModel):
    """Static display settings for a collection slug"""

    display_name: str
    priority: int = 0
    cover_image: Optional[str] = None


class EnrichedCollection(CollectionGroup):
    """Collection group ready for presentation"""

    priority: int = 0
    cover_image: str = ""


class CollectionTarget(BaseModel):
    """Marketplace collection listed by slug"""

    type: Literal["collection"] = "collection"
    slug: str


class ItemTarget(BaseModel):
    """Single known token"""

    type: Literal["item"] = "item"
    chain: str = "ethereum"
    contract: str
    token_id: str

    @field_validator("token_id", mode="before")
    @classmethod
    def _token_id_as_string(cls, value):
        return str(value)


Target = Annotated[Union[CollectionTarget, ItemTarget], Field(discriminator="type")]
