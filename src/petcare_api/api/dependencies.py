# src/petcare_api/api/dependencies.py
from functools import lru_cache

import httpx
from fastapi import Depends

from petcare_api.adapters.amazon_paapi import AmazonPaapiAdapter
from petcare_api.core.config import Settings, get_settings
from petcare_api.repositories.base import AbstractClickRepository
from petcare_api.repositories.sqlite_click_repository import SQLiteClickRepository
from petcare_api.services.click_service import ClickService
from petcare_api.services.cooldown import CooldownGate
from petcare_api.services.inflight import InFlightRegistry
from petcare_api.services.product_search_service import ProductSearchService
from petcare_api.services.search_cache import SearchCache


# Shared HTTP Client (Connection Pooling)
@lru_cache
def get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": "PetCareAPI/1.0"},
        follow_redirects=True,
    )


def build_product_search_service(
    settings: Settings, http_client: httpx.AsyncClient
) -> ProductSearchService:
    """Baut den Orchestrator samt Cache, In-Flight-Registry und Cooldown."""
    return ProductSearchService(
        provider=AmazonPaapiAdapter(http_client=http_client, settings=settings),
        cache=SearchCache(default_ttl_seconds=settings.search_cache_ttl_seconds),
        inflight=InFlightRegistry(),
        cooldown=CooldownGate(min_interval_seconds=settings.provider_cooldown_ms / 1000),
        cache_ttl_seconds=settings.search_cache_ttl_seconds,
        fallback_cache_ttl_seconds=settings.fallback_cache_ttl_seconds,
    )


# Singleton Product Search Service (ein Cache/Cooldown pro Prozess)
_product_search_service: ProductSearchService | None = None


def get_product_search_service(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> ProductSearchService:
    global _product_search_service
    if _product_search_service is None:
        _product_search_service = build_product_search_service(settings, client)
    return _product_search_service


# Singleton Repository (Initialisiert beim ersten Zugriff)
_click_repository: SQLiteClickRepository | None = None


async def get_click_repository(
    settings: Settings = Depends(get_settings),
) -> AbstractClickRepository:
    global _click_repository
    if _click_repository is None:
        repo = SQLiteClickRepository(database_url=settings.database_url)
        await repo.initialize()
        _click_repository = repo
    return _click_repository


def get_click_service(
    repository: AbstractClickRepository = Depends(get_click_repository),
) -> ClickService:
    return ClickService(repository=repository)


async def shutdown_dependencies() -> None:
    global _click_repository, _product_search_service
    await get_http_client().aclose()
    get_http_client.cache_clear()
    if _click_repository is not None:
        await _click_repository.dispose()
    _click_repository = None
    _product_search_service = None
