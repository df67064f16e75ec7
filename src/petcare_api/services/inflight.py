from __future__ import annotations

import asyncio

from petcare_api.domain.models import Product


class InFlightRegistry:
    """
    Laufende Provider-Anfragen pro Suchbegriff (Request Coalescing).
    Pro Key existiert höchstens ein Task; alle Wartenden teilen sich dessen Ergebnis.
    """

    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Task[list[Product]]] = {}

    def try_join(self, key: str) -> asyncio.Task[list[Product]] | None:
        return self._pending.get(key)

    def register(self, key: str, task: asyncio.Task[list[Product]]) -> None:
        if key in self._pending:
            raise RuntimeError(f"Request for '{key}' is already in flight")
        self._pending[key] = task

    def release(self, key: str) -> None:
        self._pending.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)
