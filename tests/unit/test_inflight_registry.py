import asyncio

import pytest

from petcare_api.services.inflight import InFlightRegistry


@pytest.mark.asyncio  # type: ignore[misc]
async def test_register_join_and_release() -> None:
    registry = InFlightRegistry()
    task = asyncio.create_task(asyncio.sleep(0, result=[]))

    assert registry.try_join("collar") is None
    registry.register("collar", task)

    assert registry.try_join("collar") is task
    assert "collar" in registry

    registry.release("collar")
    assert registry.try_join("collar") is None
    assert len(registry) == 0
    await task


@pytest.mark.asyncio  # type: ignore[misc]
async def test_register_twice_raises() -> None:
    registry = InFlightRegistry()
    task = asyncio.create_task(asyncio.sleep(0, result=[]))
    registry.register("collar", task)

    with pytest.raises(RuntimeError):
        registry.register("collar", task)
    await task


def test_release_unknown_key_is_noop() -> None:
    registry = InFlightRegistry()
    registry.release("nothing")
    assert len(registry) == 0
