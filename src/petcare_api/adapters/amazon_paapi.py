# src/petcare_api/adapters/amazon_paapi.py
from __future__ import annotations

import json
import logging
import math
import re
import time
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from petcare_api.adapters.aws_signing import AwsSigV4Auth
from petcare_api.adapters.fallback import fallback_products
from petcare_api.core.config import Settings
from petcare_api.core.metrics import EXTERNAL_API_COUNT, EXTERNAL_API_DURATION, SEARCH_FALLBACK
from petcare_api.domain.models import (
    RATING_NOT_AVAILABLE,
    FallbackReason,
    Product,
    ProviderResult,
    ResultOrigin,
)
from petcare_api.domain.ports import ExternalApiError, ProductSearchPort

logger = logging.getLogger(__name__)

_SOURCE = "amazon_paapi"
_SERVICE = "ProductAdvertisingAPI"
_PATH = "/paapi5/searchitems"
_TARGET = "com.amazon.paapi5.v1.ProductAdvertisingAPIv1.SearchItems"

_RESOURCES = [
    "ItemInfo.Title",
    "Images.Primary.Large",
    "Offers.Listings.Price",
    "CustomerReviews.Count",
    "CustomerReviews.StarRating",
]

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")

# ---------------------------------------------------------------------------
# Interne Rohdaten-Schemas (PA-API 5 SearchItems Response)
# Alle Felder optional, da die Resources je nach Artikel fehlen können.
# ---------------------------------------------------------------------------


class _DisplayValue(BaseModel):
    display_value: str | None = Field(default=None, alias="DisplayValue")


class _ItemInfo(BaseModel):
    title: _DisplayValue | None = Field(default=None, alias="Title")


class _ImageSize(BaseModel):
    url: str | None = Field(default=None, alias="URL")


class _PrimaryImage(BaseModel):
    large: _ImageSize | None = Field(default=None, alias="Large")


class _Images(BaseModel):
    primary: _PrimaryImage | None = Field(default=None, alias="Primary")


class _Price(BaseModel):
    display_amount: str | None = Field(default=None, alias="DisplayAmount")


class _Listing(BaseModel):
    price: _Price | None = Field(default=None, alias="Price")


class _Offers(BaseModel):
    listings: list[_Listing] = Field(default_factory=list, alias="Listings")


class _CustomerReviews(BaseModel):
    # Roh übernommen, Umwandlung in _parse_count/_parse_rating
    count: Any = Field(default=None, alias="Count")
    # PA-API liefert {"Value": 4.5}, ältere Payloads eine nackte Zahl oder "N/A"
    star_rating: Any = Field(default=None, alias="StarRating")


class _PaapiItem(BaseModel):
    asin: str | None = Field(default=None, alias="ASIN")
    detail_page_url: str | None = Field(default=None, alias="DetailPageURL")
    item_info: _ItemInfo | None = Field(default=None, alias="ItemInfo")
    images: _Images | None = Field(default=None, alias="Images")
    offers: _Offers | None = Field(default=None, alias="Offers")
    customer_reviews: _CustomerReviews | None = Field(default=None, alias="CustomerReviews")


class _SearchResult(BaseModel):
    items: list[Any] = Field(alias="Items")


class _SearchItemsResponse(BaseModel):
    search_result: _SearchResult = Field(alias="SearchResult")


# ---------------------------------------------------------------------------
# Parsing-Helfer
# ---------------------------------------------------------------------------


def parse_price(display_amount: str | None) -> float:
    """'$1,234.56' -> 1234.56; alles Unparsebare wird zu 0."""
    if not display_amount:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", display_amount)
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return 0.0
    return float(match.group())


def _parse_rating(raw: Any) -> float | str:
    value = raw.get("Value") if isinstance(raw, dict) else raw
    if not value or isinstance(value, bool):
        return RATING_NOT_AVAILABLE
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return RATING_NOT_AVAILABLE
    if not math.isfinite(rating) or rating < 0:
        return RATING_NOT_AVAILABLE
    return rating


def _parse_count(raw: Any) -> int:
    """Nur ganzzahlige, nicht-negative Werte; alles andere wird zu 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    if not value.is_integer() or value < 0:
        return 0
    return int(value)


def _normalize_item(item: _PaapiItem) -> Product:
    title = None
    if item.item_info and item.item_info.title:
        title = item.item_info.title.display_value

    image = None
    if item.images and item.images.primary and item.images.primary.large:
        image = item.images.primary.large.url

    display_amount = None
    if item.offers and item.offers.listings and item.offers.listings[0].price:
        display_amount = item.offers.listings[0].price.display_amount

    reviews = item.customer_reviews

    return Product(
        id=item.asin or "",
        title=title or "Unknown Product",
        image=image or "",
        price=parse_price(display_amount),
        rating=_parse_rating(reviews.star_rating if reviews else None),
        reviews_count=_parse_count(reviews.count if reviews else None),
        link=item.detail_page_url or "",
    )


# ---------------------------------------------------------------------------
# Adapter-Implementierung
# ---------------------------------------------------------------------------


class AmazonPaapiAdapter(ProductSearchPort):
    """
    Adapter für die Amazon Product Advertising API 5 (SearchItems).

    Zustände:
      - nicht konfiguriert: sofort Fallback-Daten, kein Netzwerkaufruf
      - Aufruf erfolgreich: normalisierte Produkte
      - Aufruf fehlgeschlagen: Fallback-Daten, der Fehler wird nur geloggt
    Kein Retry innerhalb des Adapters.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = http_client
        self._settings = settings
        self._auth: AwsSigV4Auth | None = None
        if settings.amazon_configured:
            self._auth = AwsSigV4Auth(
                access_key=settings.amazon_access_key,
                secret_key=settings.amazon_secret_key,
                region=settings.amazon_region,
                service=_SERVICE,
            )

    @property
    def configured(self) -> bool:
        return self._auth is not None

    @property
    def dispatches_requests(self) -> bool:
        # Ohne Credentials geht kein Request raus, also auch kein Cooldown-Slot
        return self.configured

    async def fetch_products(self, query: str) -> ProviderResult:
        if not self.configured:
            logger.warning("Amazon credentials missing or invalid, using fallback data")
            return self._fallback(query, FallbackReason.NOT_CONFIGURED)

        logger.info("Hitting Amazon PA-API for '%s'", query)
        started = time.perf_counter()
        try:
            products = await self._search_items(query)
        except ExternalApiError as e:
            EXTERNAL_API_COUNT.labels(source=_SOURCE, status="error").inc()
            logger.warning("Amazon PA-API call failed, using fallback data: %s", e.detail)
            return self._fallback(query, FallbackReason.UPSTREAM_ERROR)
        finally:
            EXTERNAL_API_DURATION.labels(source=_SOURCE).observe(time.perf_counter() - started)

        EXTERNAL_API_COUNT.labels(source=_SOURCE, status="success").inc()
        return ProviderResult(products=products, origin=ResultOrigin.PROVIDER)

    async def _search_items(self, query: str) -> list[Product]:
        s = self._settings
        payload = {
            "Keywords": query,
            "SearchIndex": s.amazon_search_index,
            "ItemCount": s.amazon_item_count,
            "Resources": _RESOURCES,
            "PartnerTag": s.amazon_partner_tag,
            "PartnerType": "Associates",
            "Marketplace": s.amazon_marketplace,
        }
        try:
            response = await self._client.post(
                f"https://{s.amazon_host}{_PATH}",
                content=json.dumps(payload).encode("utf-8"),
                headers={
                    "content-encoding": "amz-1.0",
                    "content-type": "application/json; charset=utf-8",
                    "x-amz-target": _TARGET,
                },
                auth=self._auth,
                timeout=s.provider_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalApiError(_SOURCE, str(e)) from e
        except httpx.RequestError as e:
            raise ExternalApiError(_SOURCE, f"Connection error: {e}") from e

        try:
            raw = _SearchItemsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ExternalApiError(_SOURCE, "Response without SearchResult.Items") from e

        products = []
        for raw_item in raw.search_result.items:
            if not isinstance(raw_item, dict):
                logger.warning("Skipping non-object entry in PA-API search results")
                continue
            try:
                item = _PaapiItem.model_validate(raw_item)
            except ValidationError:
                logger.warning("Skipping malformed item in PA-API search results", exc_info=True)
                continue
            if not item.asin:
                logger.warning("Skipping PA-API item without ASIN")
                continue
            products.append(_normalize_item(item))
        return products

    @staticmethod
    def _fallback(query: str, reason: FallbackReason) -> ProviderResult:
        SEARCH_FALLBACK.labels(reason=reason.value).inc()
        return ProviderResult(
            products=fallback_products(query),
            origin=ResultOrigin.FALLBACK,
            fallback_reason=reason,
        )
