# src/petcare_api/services/product_search_service.py
from __future__ import annotations

import asyncio
import logging

from petcare_api.core.metrics import SEARCH_COALESCED
from petcare_api.domain.models import Product
from petcare_api.domain.ports import ProductSearchPort
from petcare_api.services.cooldown import CooldownGate
from petcare_api.services.inflight import InFlightRegistry
from petcare_api.services.search_cache import SearchCache

logger = logging.getLogger(__name__)


def normalize_query(raw_query: str) -> str:
    """Trim, lowercase und Whitespace zusammenfassen."""
    return " ".join(raw_query.split()).lower()


def _consume_exception(task: asyncio.Task[list[Product]]) -> None:
    # Fehler auch dann abholen, wenn alle Wartenden abgebrochen haben
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Shared product search %s failed", task.get_name())


class ProductSearchService:
    """
    Einstiegspunkt der Produktsuche:
    Cache -> laufende Anfrage mitnutzen -> Cooldown -> Provider -> Cache.

    Cache-Lookup, In-Flight-Lookup und Registrierung laufen ohne await
    dazwischen, damit nie zwei Aufrufer denselben Key gleichzeitig abholen.
    """

    def __init__(
        self,
        provider: ProductSearchPort,
        cache: SearchCache,
        inflight: InFlightRegistry,
        cooldown: CooldownGate,
        cache_ttl_seconds: float,
        fallback_cache_ttl_seconds: float,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._inflight = inflight
        self._cooldown = cooldown
        self._cache_ttl = cache_ttl_seconds
        self._fallback_cache_ttl = fallback_cache_ttl_seconds

    async def search(self, raw_query: str) -> list[Product]:
        """
        Liefert immer eine Liste (ggf. Fallback-Daten). Nur interne Fehler
        werden propagiert, und zwar an alle Wartenden gleichermaßen.
        """
        key = normalize_query(raw_query)
        if not key:
            return []

        # 1. Check cache
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Returning cached results for '%s'", key)
            return cached

        # 2. Join running request
        task = self._inflight.try_join(key)
        if task is not None:
            logger.debug("Joining ongoing request for '%s'", key)
            SEARCH_COALESCED.inc()
        else:
            # 3. Become the owner
            task = asyncio.create_task(self._fetch_and_store(key), name=f"product-search:{key}")
            task.add_done_callback(_consume_exception)
            self._inflight.register(key, task)

        # shield: ein abgebrochener Aufrufer bricht den geteilten Fetch nicht ab
        products = await asyncio.shield(task)
        return list(products)

    async def _fetch_and_store(self, key: str) -> list[Product]:
        try:
            # Cooldown nur, wenn wirklich ein Request an den Provider geht
            if self._provider.dispatches_requests:
                await self._cooldown.acquire()
            result = await self._provider.fetch_products(key)

            ttl = self._fallback_cache_ttl if result.is_fallback else self._cache_ttl
            if ttl > 0:
                self._cache.set(key, result.products, ttl)
            return result.products
        finally:
            self._inflight.release(key)

    def invalidate(self, raw_query: str) -> bool:
        """Entfernt einen Suchbegriff aus dem Cache. Laufende Anfragen bleiben unberührt."""
        return self._cache.delete(normalize_query(raw_query))

    def clear(self) -> None:
        self._cache.clear()
