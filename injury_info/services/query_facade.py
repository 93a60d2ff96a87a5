"""
Query façade: the stable surface used by the HTTP routes and the tool endpoints.

Responsibility: Wrap AggregationService calls with a short-lived cache tier,
compose the condition search, and forward administrative cache clears to both tiers.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from injury_info.core.cache_store import CacheStore, make_cache_key
from injury_info.core.config import DEFAULT_SEARCH_LIMIT, FACADE_CACHE_TTL_MS, SUMMARY_OVERVIEW_CHARS
from injury_info.core.errors import InternalUsageError, ProviderUnavailableError
from injury_info.providers.base import ProviderAdapter
from injury_info.schemas.records import Article, LawFirm, SettlementRecord
from injury_info.schemas.search import ConditionSearch, SearchResult
from injury_info.services.aggregation_service import AggregationService
from injury_info.services.text_utils import truncate

logger = logging.getLogger(__name__)


def build_summary(condition: str, articles: list[Article], settlements: list[SettlementRecord]) -> str:
    """First article's overview (truncated) plus the first settlement range, or a 'being updated' note."""
    if not articles and not settlements:
        return f"Information about {condition} is currently being updated."
    summary = f"Information about {condition}"
    if articles:
        summary += f". {truncate(articles[0].content.overview, SUMMARY_OVERVIEW_CHARS)}..."
    if settlements and settlements[0].settlement_range:
        summary += f" Typical settlements range from {settlements[0].settlement_range}."
    return summary


def _require(value: str | None, name: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise InternalUsageError(f"{name} is required")
    return value.strip()


class QueryFacade:
    """Public query operations backed by the aggregation service and a façade cache tier."""

    def __init__(
        self,
        aggregation: AggregationService,
        cache: CacheStore,
        ttl_ms: int = FACADE_CACHE_TTL_MS,
        providers: Sequence[ProviderAdapter] | None = None,
    ) -> None:
        self.aggregation = aggregation
        self.cache = cache
        self.ttl_ms = ttl_ms
        providers = aggregation.providers if providers is None else providers
        self._providers = {p.name: p for p in providers}

    @property
    def provider_names(self) -> list[str]:
        return list(self._providers)

    async def _cached(self, key: str, produce: Callable[[], Awaitable[Any]]) -> Any:
        cached = self.cache.get(key, self.ttl_ms)
        if cached is not None:
            return cached
        value = await produce()
        self.cache.set(key, value)
        return value

    async def get_all_articles(self) -> list[Article]:
        articles = await self._cached(make_cache_key("all_articles"), self.aggregation.get_articles)
        return list(articles)

    async def get_article(self, slug: str) -> Article | None:
        """Article whose slug matches, or None."""
        wanted = _require(slug, "slug").lower()
        for article in await self.get_all_articles():
            if article.slug == wanted:
                return article
        return None

    async def search_articles(self, condition: str) -> list[Article]:
        """Articles whose title, description or overview contains the condition (case-insensitive)."""
        needle = _require(condition, "condition").lower()
        return [
            a for a in await self.get_all_articles()
            if needle in a.title.lower()
            or needle in a.description.lower()
            or needle in a.content.overview.lower()
        ]

    async def get_law_firms(self, specialty: str | None = None, location: str | None = None) -> list[LawFirm]:
        key = make_cache_key("law_firms", specialty=specialty, location=location)
        firms = await self._cached(key, lambda: self.aggregation.get_law_firms(specialty, location))
        return list(firms)

    async def get_settlement_data(self, condition: str, state: str | None = None) -> list[SettlementRecord]:
        condition = _require(condition, "condition")
        key = make_cache_key("settlements", condition=condition, state=state)
        records = await self._cached(key, lambda: self.aggregation.get_settlements(condition, state))
        return list(records)

    async def search_condition(self, condition: str) -> ConditionSearch:
        """Articles, law firms and settlements for one condition, fetched concurrently, plus a summary."""
        condition = _require(condition, "condition")
        logger.info("[facade:search_condition] IN  condition=%r", condition)

        async def produce() -> ConditionSearch:
            articles, law_firms, settlements = await asyncio.gather(
                self.search_articles(condition),
                self.get_law_firms(condition),
                self.get_settlement_data(condition),
            )
            return ConditionSearch(
                condition=condition,
                articles=articles,
                law_firms=law_firms,
                settlements=settlements,
                summary=build_summary(condition, articles, settlements),
            )

        result = await self._cached(make_cache_key("search", condition=condition), produce)
        logger.info("[facade:search_condition] OUT articles=%d law_firms=%d settlements=%d",
                    len(result.articles), len(result.law_firms), len(result.settlements))
        return result

    async def query_provider(
        self,
        provider: str,
        collection: str,
        query: str,
        field: str | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> SearchResult:
        """
        Direct search against one provider's collection (no cache, no fallback).
        Raises ProviderUnavailableError when that provider is not configured or fails.
        """
        adapter = self._providers.get(provider)
        if adapter is None:
            raise ProviderUnavailableError(provider, "provider is not configured")
        return await adapter.search(collection, query or "", field=field or None, limit=limit)

    def clear_cache(self) -> int:
        """Clear the façade tier and the aggregation tier. Returns entries removed."""
        removed = self.cache.clear() + self.aggregation.clear_cache()
        logger.info("[facade:clear_cache] removed=%d", removed)
        return removed
