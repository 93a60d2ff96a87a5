"""
Tests for AggregationService: priority merge, dedupe, fallback, caching, usage errors.
"""

import pytest
from conftest import FakeClock, FakeProvider, make_article, make_firm, make_settlement

from injury_info.core.cache_store import CacheStore
from injury_info.core.errors import InternalUsageError, ProviderUnavailableError
from injury_info.providers.base import ProviderResult
from injury_info.schemas.records import Source
from injury_info.services.aggregation_service import (
    AggregationService,
    dedupe_articles,
    merge_settlements,
    resolve_results,
)


def make_service(*providers, clock=None) -> AggregationService:
    return AggregationService(list(providers), CacheStore("aggregation", clock=clock or FakeClock()))


def down(name: str) -> ProviderUnavailableError:
    return ProviderUnavailableError(name, "HTTP 503 - unavailable")


class TestReducers:
    def test_dedupe_articles_is_case_insensitive_first_wins(self) -> None:
        a = make_article("sheets_medical_1", "Mesothelioma")
        b = make_article("hubspot_1", "MESOTHELIOMA", source=Source.CRM)
        assert dedupe_articles([a, b]) == [a]

    def test_dedupe_articles_keeps_punctuation_variants(self) -> None:
        a = make_article("x_1", "3M Earplugs")
        b = make_article("x_2", "3M Earplugs!")
        assert len(dedupe_articles([a, b])) == 2

    def test_merge_settlements_prefers_record_with_range(self) -> None:
        empty = make_settlement("s_1", "Mesothelioma", "California")
        ranged = make_settlement("h_1", "mesothelioma", "california", "$1M to $2M", source=Source.CRM)
        other = make_settlement("s_2", "Mesothelioma", "Texas", "$500K to $1M")
        merged = merge_settlements([empty, other, ranged])
        assert [r.id for r in merged] == ["h_1", "s_2"]

    def test_merge_settlements_keeps_first_when_both_ranged(self) -> None:
        first = make_settlement("s_1", "Silicosis", "", "$1 to $2")
        second = make_settlement("h_1", "Silicosis", "", "$3 to $4")
        assert merge_settlements([first, second]) == [first]

    def test_resolve_results_never_blends_fallback(self) -> None:
        live = make_article("s_1", "Roundup")
        results = [ProviderResult("sheets", [live]), ProviderResult("hubspot", error=down("hubspot"))]
        resolved = resolve_results(results, dedupe_articles, lambda: [make_article("fallback_1", "X", Source.FALLBACK)])
        assert resolved == [live]

    def test_resolve_results_empty_uses_fallback(self) -> None:
        fallback = [make_article("fallback_1", "X", Source.FALLBACK)]
        results = [ProviderResult("sheets"), ProviderResult("hubspot", error=down("hubspot"))]
        assert resolve_results(results, dedupe_articles, lambda: fallback) == fallback


@pytest.mark.asyncio
async def test_duplicate_title_keeps_spreadsheet_even_when_crm_answers_first() -> None:
    sheets = FakeProvider(
        "sheets",
        articles=[make_article("sheets_medical_1", "Mesothelioma Guide")],
        delay=0.05,
    )
    crm = FakeProvider(
        "hubspot",
        source=Source.CRM,
        articles=[
            make_article("hubspot_10", "mesothelioma guide", source=Source.CRM),
            make_article("hubspot_11", "Roundup Lawsuit", source=Source.CRM),
        ],
    )
    articles = await make_service(sheets, crm).get_articles()
    assert [a.id for a in articles] == ["sheets_medical_1", "hubspot_11"]
    assert articles[0].source is Source.SPREADSHEET


@pytest.mark.asyncio
async def test_one_failing_provider_does_not_mix_in_fallback() -> None:
    sheets = FakeProvider("sheets", error=down("sheets"))
    crm = FakeProvider("hubspot", source=Source.CRM, articles=[make_article("hubspot_1", "Talc", source=Source.CRM)])
    articles = await make_service(sheets, crm).get_articles()
    assert [a.id for a in articles] == ["hubspot_1"]


@pytest.mark.asyncio
async def test_all_providers_failing_returns_fallback_articles() -> None:
    service = make_service(FakeProvider("sheets", error=down("sheets")), FakeProvider("hubspot", error=down("hubspot")))
    articles = await service.get_articles()
    assert len(articles) == 6
    assert all(a.source is Source.FALLBACK for a in articles)
    assert articles[0].id == "fallback_1"


@pytest.mark.asyncio
async def test_all_providers_empty_returns_fallback() -> None:
    articles = await make_service(FakeProvider("sheets"), FakeProvider("hubspot")).get_articles()
    assert {a.source for a in articles} == {Source.FALLBACK}


@pytest.mark.asyncio
async def test_no_providers_returns_fallback() -> None:
    records = await make_service().get_settlements("Mesothelioma", "Ohio")
    assert len(records) == 1
    assert records[0].settlement_range == "$1.2 million to $2.4 million"
    assert records[0].state == "Ohio"


@pytest.mark.asyncio
async def test_unexpected_exception_degrades_like_provider_error() -> None:
    broken = FakeProvider("sheets", error=RuntimeError("boom"))
    records = await make_service(broken).get_settlements("asbestosis")
    assert records[0].source is Source.FALLBACK
    assert records[0].settlement_range == "Varies by case"


@pytest.mark.asyncio
async def test_cache_hit_makes_no_provider_calls(clock: FakeClock) -> None:
    sheets = FakeProvider("sheets", articles=[make_article("s_1", "Silicosis")])
    service = make_service(sheets, clock=clock)
    first = await service.get_articles()
    second = await service.get_articles()
    assert first == second
    assert sheets.calls == [("articles",)]


@pytest.mark.asyncio
async def test_entries_expire_after_operation_ttl(clock: FakeClock) -> None:
    sheets = FakeProvider("sheets", articles=[make_article("s_1", "Silicosis")])
    service = make_service(sheets, clock=clock)
    await service.get_articles()
    clock.advance(30 * 60 - 1)
    await service.get_articles()
    assert len(sheets.calls) == 1
    clock.advance(1)
    await service.get_articles()
    assert len(sheets.calls) == 2


@pytest.mark.asyncio
async def test_fallback_results_are_cached(clock: FakeClock) -> None:
    sheets = FakeProvider("sheets", error=down("sheets"))
    service = make_service(sheets, clock=clock)
    await service.get_law_firms()
    await service.get_law_firms()
    assert len(sheets.calls) == 1


@pytest.mark.asyncio
async def test_cache_key_ignores_case_and_whitespace() -> None:
    sheets = FakeProvider("sheets", settlements=[make_settlement("s_1", "Mesothelioma", "", "$1 to $2")])
    service = make_service(sheets)
    await service.get_settlements("Mesothelioma")
    await service.get_settlements("  mesothelioma ")
    assert len(sheets.calls) == 1


@pytest.mark.asyncio
async def test_clear_cache_forces_new_calls() -> None:
    sheets = FakeProvider("sheets", articles=[make_article("s_1", "Silicosis")])
    service = make_service(sheets)
    await service.get_articles()
    assert service.clear_cache() == 1
    await service.get_articles()
    assert len(sheets.calls) == 2


@pytest.mark.asyncio
async def test_settlements_merge_across_providers() -> None:
    sheets = FakeProvider("sheets", settlements=[make_settlement("s_1", "Mesothelioma", "California")])
    crm = FakeProvider(
        "hubspot",
        source=Source.CRM,
        settlements=[make_settlement("h_1", "mesothelioma", "California", "$1M to $2M", source=Source.CRM)],
    )
    records = await make_service(sheets, crm).get_settlements("Mesothelioma", "California")
    assert [r.id for r in records] == ["h_1"]
    assert sheets.calls == [("settlements", "Mesothelioma", "California")]


@pytest.mark.asyncio
async def test_law_firms_are_deduped_and_filtered() -> None:
    sheets = FakeProvider(
        "sheets",
        law_firms=[
            make_firm("s_1", "Coastal Injury Law", ["Mesothelioma"], "Los Angeles, California"),
            make_firm("s_2", "Lone Star Legal", ["Roundup"], "Houston, Texas"),
        ],
    )
    crm = FakeProvider(
        "hubspot",
        source=Source.CRM,
        law_firms=[make_firm("h_1", "coastal injury law", ["Mesothelioma"], "San Diego, California", Source.CRM)],
    )
    firms = await make_service(sheets, crm).get_law_firms("mesothelioma", "california")
    assert [f.id for f in firms] == ["s_1"]


@pytest.mark.asyncio
async def test_law_firm_fallback_filters_by_specialty_only() -> None:
    sheets = FakeProvider("sheets", law_firms=[make_firm("s_1", "Lone Star Legal", ["Roundup"], "Houston, Texas")])
    crm = FakeProvider("hubspot", source=Source.CRM)
    firms = await make_service(sheets, crm).get_law_firms("mesothelioma", "California")
    assert [f.id for f in firms] == ["fallback_firm_1"]
    assert firms[0].source is Source.FALLBACK


@pytest.mark.asyncio
async def test_law_firm_fallback_without_match_returns_everything() -> None:
    firms = await make_service().get_law_firms("hernia mesh")
    assert [f.id for f in firms] == ["fallback_firm_1", "fallback_firm_2", "fallback_firm_3"]


@pytest.mark.asyncio
async def test_returned_list_is_a_copy() -> None:
    service = make_service(FakeProvider("sheets", articles=[make_article("s_1", "Silicosis")]))
    first = await service.get_articles()
    first.clear()
    assert len(await service.get_articles()) == 1


class TestUsageErrors:
    @pytest.mark.asyncio
    async def test_unknown_operation(self) -> None:
        with pytest.raises(InternalUsageError):
            await make_service().aggregate("verdicts")

    @pytest.mark.asyncio
    async def test_missing_condition(self) -> None:
        sheets = FakeProvider("sheets")
        with pytest.raises(InternalUsageError):
            await make_service(sheets).get_settlements("   ")
        assert sheets.calls == []

    @pytest.mark.asyncio
    async def test_unexpected_argument(self) -> None:
        with pytest.raises(InternalUsageError):
            await make_service().aggregate("articles", condition="x")

    @pytest.mark.asyncio
    async def test_non_string_argument(self) -> None:
        with pytest.raises(InternalUsageError):
            await make_service().aggregate("settlements", condition=42)

    @pytest.mark.asyncio
    async def test_usage_error_from_provider_propagates(self) -> None:
        sheets = FakeProvider("sheets", error=InternalUsageError("bad limit"))
        with pytest.raises(InternalUsageError):
            await make_service(sheets).get_articles()


@pytest.mark.asyncio
async def test_mutating_returned_records_does_not_change_the_cache() -> None:
    sheets = FakeProvider("sheets", law_firms=[make_firm("s_1", "Coastal Injury Law", ["Mesothelioma"])])
    service = make_service(sheets)
    firms = await service.get_law_firms()
    firms[0].specialties.clear()
    again = await service.get_law_firms()
    assert again[0].specialties == ["Mesothelioma"]
    assert len(sheets.calls) == 1
