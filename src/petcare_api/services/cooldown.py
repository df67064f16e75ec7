from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from petcare_api.core.metrics import COOLDOWN_WAIT

logger = logging.getLogger(__name__)


class CooldownGate:
    """
    Globaler Mindestabstand zwischen zwei Provider-Aufrufen, unabhängig vom Key.

    acquire() reserviert den nächsten freien Slot und stempelt ihn sofort, bevor
    gewartet wird. Ein zweiter, gleichzeitiger Aufrufer rechnet dadurch schon mit
    dem neuen Stempel und reiht sich dahinter ein (FIFO nach Ankunft).
    """

    def __init__(
        self,
        min_interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._interval = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_hit_at: float | None = None

    @property
    def last_hit_at(self) -> float | None:
        return self._last_hit_at

    async def acquire(self) -> None:
        now = self._clock()
        slot = now
        if self._last_hit_at is not None:
            slot = max(now, self._last_hit_at + self._interval)
        # Stempeln vor dem Warten
        self._last_hit_at = slot

        wait = slot - now
        COOLDOWN_WAIT.observe(wait)
        if wait > 0:
            logger.debug("Global cooldown: waiting %.3fs before hitting the provider", wait)
            await self._sleep(wait)

    def reset(self) -> None:
        self._last_hit_at = None
