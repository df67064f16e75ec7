from petcare_api.adapters.fallback import fallback_products
from petcare_api.services.search_cache import SearchCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_cache_hit_and_miss() -> None:
    cache = SearchCache(default_ttl_seconds=60)
    products = fallback_products("collar")

    # Miss
    assert cache.get("collar") is None

    # Set
    cache.set("collar", products)

    # Hit
    assert cache.get("collar") == products


def test_cache_ttl_expiry() -> None:
    clock = FakeClock()
    cache = SearchCache(default_ttl_seconds=10, clock=clock)
    products = fallback_products("leash")

    cache.set("leash", products)

    # Still valid
    clock.now += 9
    assert cache.get("leash") == products

    # Expired
    clock.now += 1
    assert cache.get("leash") is None
    assert len(cache) == 0


def test_cache_explicit_ttl_overrides_default() -> None:
    clock = FakeClock()
    cache = SearchCache(default_ttl_seconds=3600, clock=clock)
    cache.set("bowl", fallback_products("bowl"), ttl_seconds=5)

    clock.now += 6
    assert cache.get("bowl") is None


def test_cache_set_replaces_entry() -> None:
    cache = SearchCache(default_ttl_seconds=60)
    cache.set("toy", fallback_products("toy"))
    replacement = fallback_products("toy")[:1]

    cache.set("toy", replacement)

    assert cache.get("toy") == replacement
    assert len(cache) == 1


def test_cache_returns_copy() -> None:
    cache = SearchCache(default_ttl_seconds=60)
    cache.set("toy", fallback_products("toy"))

    cache.get("toy").clear()  # type: ignore[union-attr]

    assert len(cache.get("toy") or []) == 3


def test_cache_delete_and_clear() -> None:
    cache = SearchCache(default_ttl_seconds=60)
    cache.set("a", [])
    cache.set("b", [])

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert cache.get("b") is None
