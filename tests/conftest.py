"""
Shared fakes for provider, aggregation and façade tests.

FakeProvider records every call and can be told to fail or to answer late, so
tests can control completion order without any network.
"""

import asyncio

import pytest

from injury_info.core.cache_store import CacheStore
from injury_info.providers.base import ProviderAdapter
from injury_info.schemas.records import Article, ArticleContent, LawFirm, SettlementRecord, Source
from injury_info.services.aggregation_service import AggregationService
from injury_info.services.query_facade import QueryFacade


class FakeClock:
    """Settable clock in seconds, as returned by time.time()."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


class FakeProvider(ProviderAdapter):
    def __init__(
        self,
        name: str,
        source: Source = Source.SPREADSHEET,
        articles=None,
        law_firms=None,
        settlements=None,
        error: Exception | None = None,
        delay: float = 0.0,
        rows=None,
    ) -> None:
        super().__init__(client=None)
        self.name = name
        self.source = source
        self.articles = articles or []
        self.law_firms = law_firms or []
        self.settlements = settlements or []
        self.error = error
        self.delay = delay
        self.rows = rows or {}
        self.collections = frozenset(self.rows)
        self.calls: list[tuple] = []

    async def _answer(self, call: tuple, records: list) -> list:
        self.calls.append(call)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(records)

    async def _fetch(self, name):
        return await self._answer(("fetch", name), self.rows.get(name, []))

    async def get_articles(self):
        return await self._answer(("articles",), self.articles)

    async def get_law_firms(self, specialty=None, location=None):
        return await self._answer(("law_firms", specialty, location), self.law_firms)

    async def get_settlements(self, condition, state=None):
        return await self._answer(("settlements", condition, state), self.settlements)


def make_article(id: str, title: str, source: Source = Source.SPREADSHEET, overview: str = "") -> Article:
    return Article(
        id=id,
        source=source,
        title=title,
        description=f"About {title}",
        content=ArticleContent(overview=overview or f"{title} overview."),
    )


def make_firm(id: str, name: str, specialties: list[str], location: str = "", source: Source = Source.SPREADSHEET) -> LawFirm:
    return LawFirm(id=id, source=source, name=name, specialties=specialties, location=location)


def make_settlement(id: str, condition: str, state: str = "", settlement_range: str = "", source: Source = Source.SPREADSHEET) -> SettlementRecord:
    return SettlementRecord(id=id, source=source, condition=condition, state=state, settlement_range=settlement_range)


def build_facade(*providers: ProviderAdapter, clock=None) -> QueryFacade:
    clock = clock or FakeClock()
    aggregation = AggregationService(list(providers), CacheStore("aggregation", clock=clock))
    return QueryFacade(aggregation, CacheStore("facade", clock=clock))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
