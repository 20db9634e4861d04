"""Food search across regional, international and custom sources."""

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from food_tracker.adapters.fdc_client import FdcClient
from food_tracker.domain.errors import SearchFailedError
from food_tracker.domain.foods import CanonicalFood, SearchMode
from food_tracker.services.cache import Cache
from food_tracker.services.normalizer import (
    normalize_custom,
    normalize_international,
    normalize_regional,
)

MIN_QUERY_LENGTH = 2
MAX_GUARDED_KEYS = 1024

_logger = logging.getLogger(__name__)

SearchCall = Callable[[str], Awaitable[list[CanonicalFood]]]


class RegionalFoodSource(Protocol):
    """Lookup interface for the regional foods table."""

    async def search_foods(self, query: str) -> list[dict[str, object]]:
        """Return raw regional rows whose name matches the query."""


class CustomFoodRepository(Protocol):
    """Read interface for a user's custom foods."""

    def list_foods(self, user_id: int) -> list[dict[str, object]]:
        """Return every custom food row owned by the user."""


@dataclass
class FoodSearchService:
    """Fan a query out to the food sources and merge the candidates."""

    regional_source: RegionalFoodSource
    fdc_client: FdcClient
    cache: Cache
    page_size: int = 25
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(
        self,
        query_text: str,
        mode: SearchMode,
        custom_foods: Sequence[dict[str, object]],
    ) -> list[CanonicalFood]:
        """Search the sources selected by ``mode``.

        In ``ALL`` mode custom matches come first, then regional, then
        international, whatever order the lookups finish in. A failing lookup
        contributes no candidates; ``SearchFailedError`` is raised only when
        every issued lookup failed, carrying any custom matches.
        """
        query = query_text.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        if mode == SearchMode.CUSTOM:
            return filter_custom_foods(query, custom_foods)
        if mode == SearchMode.REGIONAL:
            return await self._search_single("regional", self.search_regional, query)
        if mode == SearchMode.INTERNATIONAL:
            return await self._search_single(
                "international", self.search_international, query
            )

        custom = filter_custom_foods(query, custom_foods)
        outcomes = await asyncio.gather(
            self.search_regional(query),
            self.search_international(query),
            return_exceptions=True,
        )
        merged = list(custom)
        failures = 0
        sources = ("regional", "international")
        for source, outcome in zip(sources, outcomes, strict=True):
            if isinstance(outcome, Exception):
                failures += 1
                _logger.warning(
                    "Food search source failed: source=%s query=%s error=%s",
                    source,
                    query,
                    outcome,
                )
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            merged.extend(outcome)
        if failures == len(outcomes):
            raise SearchFailedError(partial=custom)
        return merged

    async def search_regional(self, query: str) -> list[CanonicalFood]:
        """Search the regional foods table."""
        rows = await self._call_with_retry(
            lambda: self.regional_source.search_foods(query), action="regional"
        )
        return [normalize_regional(row) for row in rows]

    async def search_international(self, query: str) -> list[CanonicalFood]:
        """Search FoodData Central with caching."""
        cache_key = f"fdc:search:{query.lower()}:{self.page_size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=self.page_size),
            action="international",
        )
        foods = [normalize_international(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        return foods

    async def _search_single(
        self, source: str, search: SearchCall, query: str
    ) -> list[CanonicalFood]:
        try:
            return await search(query)
        except Exception as exc:
            _logger.warning(
                "Food search source failed: source=%s query=%s error=%s",
                source,
                query,
                exc,
            )
            raise SearchFailedError() from exc

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[Any]], *, action: str
    ) -> Any:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if attempt > self.retry_attempts:
                    raise
                _logger.info(
                    "Food search %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                await asyncio.sleep(self.retry_delay_seconds)


def filter_custom_foods(
    query: str, custom_foods: Sequence[dict[str, object]]
) -> list[CanonicalFood]:
    """Return custom foods whose name contains the query, case-insensitively."""
    needle = query.lower()
    return [
        normalize_custom(row)
        for row in custom_foods
        if needle in str(row.get("food_name") or "").lower()
    ]


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


@dataclass
class LatestQueryGuard:
    """Drop results of searches superseded by a newer query for the same field.

    Each ``run`` takes a ticket for ``key``. The search is skipped if a newer
    ticket was issued during the debounce delay, and its result is discarded
    (``None``) if a newer ticket was issued while it was in flight. At most
    ``max_keys`` keys are tracked; the least recently used is forgotten.
    """

    debounce_seconds: float = 0.0
    max_keys: int = MAX_GUARDED_KEYS
    _tickets: OrderedDict[str, int] = field(default_factory=OrderedDict)
    _last_ticket: int = 0

    async def run(
        self, key: str, query_text: str, search: SearchCall
    ) -> list[CanonicalFood] | None:
        """Run ``search`` unless superseded; return None for stale results."""
        self._last_ticket += 1
        ticket = self._last_ticket
        self._tickets.pop(key, None)
        self._tickets[key] = ticket
        while len(self._tickets) > self.max_keys:
            self._tickets.popitem(last=False)
        if self.debounce_seconds > 0:
            await asyncio.sleep(self.debounce_seconds)
            if not self.is_current(key, ticket):
                return None
        try:
            results = await search(query_text)
        except Exception:
            if not self.is_current(key, ticket):
                return None
            raise
        if not self.is_current(key, ticket):
            _logger.debug("Discarding stale search results: key=%s", key)
            return None
        return results

    def is_current(self, key: str, ticket: int) -> bool:
        return self._tickets.get(key) == ticket

    def __len__(self) -> int:
        return len(self._tickets)
