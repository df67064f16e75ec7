# src/petcare_api/domain/models.py
from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------

RATING_NOT_AVAILABLE = "N/A"


class ResultOrigin(StrEnum):
    PROVIDER = "provider"
    FALLBACK = "fallback"


class FallbackReason(StrEnum):
    NOT_CONFIGURED = "not_configured"
    UPSTREAM_ERROR = "upstream_error"


class Product(BaseModel):
    """
    Normalisiertes Affiliate-Produkt, wie es an den Client geht.
    JSON-Shape: {id, title, image, price, rating, reviewsCount, link}
    """

    id: str = Field(description="ASIN bzw. Provider-spezifischer Identifier")
    title: str
    image: str = ""
    price: float = Field(default=0.0, ge=0)
    rating: float | Literal["N/A"] = RATING_NOT_AVAILABLE
    reviews_count: int = Field(default=0, ge=0, alias="reviewsCount")
    link: str = ""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ProviderResult(BaseModel):
    """Ergebnis eines Provider-Aufrufs inkl. Herkunft (echte Daten oder Fallback)."""

    products: list[Product]
    origin: ResultOrigin = ResultOrigin.PROVIDER
    fallback_reason: FallbackReason | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_fallback(self) -> bool:
        return self.origin is ResultOrigin.FALLBACK


# ---------------------------------------------------------------------------
# Aggregate: Click (Affiliate-Link Tracking)
# ---------------------------------------------------------------------------


class Click(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str = Field(description="Aus dem API-Key abgeleitete User-ID")
    product_id: str = Field(min_length=1)
    product_title: str | None = None
    affiliate_link: str | None = None
    source: str = "Amazon_Search"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# API Request/Response Schemas
# ---------------------------------------------------------------------------


class ProductList(BaseModel):
    products: list[Product]


class SearchResponse(BaseModel):
    success: bool = True
    count: int
    data: ProductList

    @classmethod
    def of(cls, products: list[Product]) -> SearchResponse:
        return cls(count=len(products), data=ProductList(products=products))


class ClickCreate(BaseModel):
    product_id: str = Field(min_length=1, max_length=64)
    product_title: str | None = Field(default=None, max_length=512)
    affiliate_link: str | None = Field(default=None, max_length=2048)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClickResponse(BaseModel):
    success: bool = True
    data: Click


class ClickListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[Click]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
