"""Tests for discarding superseded search responses."""

import asyncio

import pytest

from food_tracker.domain.foods import CanonicalFood
from food_tracker.services.normalizer import normalize_regional
from food_tracker.services.search import LatestQueryGuard


def _food(name: str) -> CanonicalFood:
    return normalize_regional({"id": len(name), "food_name": name})


def test_slow_earlier_query_is_discarded() -> None:
    guard = LatestQueryGuard()
    delays = {"chi": 0.05, "chicken": 0.0}

    async def search(query: str) -> list[CanonicalFood]:
        await asyncio.sleep(delays[query])
        return [_food(query)]

    async def scenario() -> tuple[object, object]:
        first = asyncio.create_task(guard.run("field", "chi", search))
        await asyncio.sleep(0)
        second = asyncio.create_task(guard.run("field", "chicken", search))
        return await first, await second

    stale, latest = asyncio.run(scenario())

    assert stale is None
    assert [food.display_name for food in latest] == ["chicken"]


def test_keys_are_independent() -> None:
    guard = LatestQueryGuard()

    async def search(query: str) -> list[CanonicalFood]:
        await asyncio.sleep(0.01)
        return [_food(query)]

    async def scenario() -> list[object]:
        return await asyncio.gather(
            guard.run("breakfast", "roti", search),
            guard.run("dinner", "rice", search),
        )

    breakfast, dinner = asyncio.run(scenario())

    assert breakfast is not None
    assert dinner is not None


def test_debounce_skips_superseded_queries() -> None:
    guard = LatestQueryGuard(debounce_seconds=0.02)
    searched: list[str] = []

    async def search(query: str) -> list[CanonicalFood]:
        searched.append(query)
        return [_food(query)]

    async def scenario() -> list[object]:
        return await asyncio.gather(
            guard.run("field", "ch", search),
            guard.run("field", "chick", search),
            guard.run("field", "chicken", search),
        )

    results = asyncio.run(scenario())

    assert searched == ["chicken"]
    assert results[:2] == [None, None]
    assert results[2] is not None


def test_error_from_current_query_propagates() -> None:
    guard = LatestQueryGuard()

    async def search(query: str) -> list[CanonicalFood]:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        asyncio.run(guard.run("field", "roti", search))


def test_error_from_stale_query_is_dropped() -> None:
    guard = LatestQueryGuard()

    async def search(query: str) -> list[CanonicalFood]:
        if query == "ro":
            await asyncio.sleep(0.02)
            raise RuntimeError("late failure")
        return [_food(query)]

    async def scenario() -> list[object]:
        return await asyncio.gather(
            guard.run("field", "ro", search),
            guard.run("field", "roti", search),
        )

    stale, latest = asyncio.run(scenario())

    assert stale is None
    assert latest is not None


def test_tracked_keys_are_bounded() -> None:
    guard = LatestQueryGuard(max_keys=2)

    async def search(query: str) -> list[CanonicalFood]:
        return [_food(query)]

    async def scenario() -> list[object]:
        return [
            await guard.run(f"field-{index}", "roti", search) for index in range(5)
        ]

    results = asyncio.run(scenario())

    assert all(result is not None for result in results)
    assert len(guard) == 2


def test_forgotten_key_does_not_revive_stale_results() -> None:
    guard = LatestQueryGuard(max_keys=1)

    async def search(query: str) -> list[CanonicalFood]:
        await asyncio.sleep(0.02 if query == "ro" else 0)
        return [_food(query)]

    async def scenario() -> list[object]:
        slow = asyncio.create_task(guard.run("breakfast", "ro", search))
        await asyncio.sleep(0)
        await guard.run("dinner", "rice", search)
        latest = await guard.run("breakfast", "roti", search)
        return [await slow, latest]

    stale, latest = asyncio.run(scenario())

    assert stale is None
    assert latest is not None
