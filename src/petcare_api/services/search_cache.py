from __future__ import annotations

import time
from collections.abc import Callable

from petcare_api.core.metrics import CACHE_HITS, CACHE_MISSES
from petcare_api.domain.models import Product


class SearchCache:
    """
    Einfacher TTL-basierter In-Memory Cache für Suchergebnisse.
    Key ist der normalisierte Suchbegriff; abgelaufene Einträge werden beim Lesen entfernt.
    """

    def __init__(
        self,
        default_ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        # Key: normalisierter Suchbegriff, Value: (Produkte, expires_at)
        self._storage: dict[str, tuple[list[Product], float]] = {}

    def get(self, key: str) -> list[Product] | None:
        """Holt Produkte aus dem Cache, sofern vorhanden und nicht abgelaufen."""
        entry = self._storage.get(key)
        if entry is None:
            CACHE_MISSES.inc()
            return None

        products, expires_at = entry
        if self._clock() >= expires_at:
            del self._storage[key]
            CACHE_MISSES.inc()
            return None

        CACHE_HITS.inc()
        return list(products)

    def set(self, key: str, products: list[Product], ttl_seconds: float | None = None) -> None:
        """Speichert Produkte; ein vorhandener Eintrag wird komplett ersetzt."""
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        self._storage[key] = (list(products), self._clock() + ttl)

    def delete(self, key: str) -> bool:
        return self._storage.pop(key, None) is not None

    def clear(self) -> None:
        self._storage.clear()

    def __len__(self) -> int:
        return len(self._storage)
