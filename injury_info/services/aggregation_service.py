"""
Aggregation: fan out one logical query to every provider, merge, dedupe, fall back.

Responsibility: Resolve articles / law firms / settlements into one freshness-
bounded record list. Providers are called concurrently but merged in their
declared priority order (the order passed to the constructor, spreadsheet
before CRM), so on a duplicate the earlier provider's record wins regardless of
which call finished first. Provider failures never escape: each call becomes a
ProviderResult, and resolve_results picks merged data or the built-in fallback.
Only usage errors (unknown operation, bad arguments) are raised.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from injury_info.core.cache_store import CacheStore, make_cache_key
from injury_info.core.config import ARTICLES_TTL_MS, LAW_FIRMS_TTL_MS, SETTLEMENTS_TTL_MS
from injury_info.core.errors import InternalUsageError, ProviderError
from injury_info.providers.base import ProviderAdapter, ProviderResult
from injury_info.schemas.records import Article, LawFirm, SettlementRecord
from injury_info.services.fallback_data import fallback_articles, fallback_law_firms, fallback_settlements

logger = logging.getLogger(__name__)

OP_ARTICLES = "articles"
OP_LAW_FIRMS = "law_firms"
OP_SETTLEMENTS = "settlements"


# --- Reducers (pure) ---

def dedupe_articles(articles: list[Article]) -> list[Article]:
    """Keep the first article per lowercased title. Punctuation differences are not merged."""
    seen: set[str] = set()
    kept = []
    for article in articles:
        key = article.title.lower()
        if key in seen:
            continue
        seen.add(key)
        kept.append(article)
    return kept


def dedupe_law_firms(firms: list[LawFirm]) -> list[LawFirm]:
    """Keep the first firm per lowercased name."""
    seen: set[str] = set()
    kept = []
    for firm in firms:
        key = firm.name.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        kept.append(firm)
    return kept


def filter_law_firms(firms: list[LawFirm], specialty: str | None = None, location: str | None = None) -> list[LawFirm]:
    """Case-insensitive substring match on any specialty and on location."""
    wanted_specialty = (specialty or "").strip().lower()
    wanted_location = (location or "").strip().lower()
    kept = []
    for firm in firms:
        if wanted_specialty and not any(wanted_specialty in s.lower() for s in firm.specialties):
            continue
        if wanted_location and wanted_location not in firm.location.lower():
            continue
        kept.append(firm)
    return kept


def merge_settlements(records: list[SettlementRecord]) -> list[SettlementRecord]:
    """
    One record per (condition, state), compared case-insensitively. Within a group the
    first record is kept unless a later one has a settlement range and it does not.
    Group order follows first appearance.
    """
    best: dict[tuple[str, str], SettlementRecord] = {}
    for record in records:
        key = (record.condition.strip().lower(), record.state.strip().lower() or "all")
        current = best.get(key)
        if current is None or (record.settlement_range and not current.settlement_range):
            best[key] = record
    return list(best.values())


def resolve_results(
    results: Sequence[ProviderResult],
    merge: Callable[[list[Any]], list[Any]],
    fallback: Callable[[], list[Any]],
) -> list[Any]:
    """
    Merge successful provider results in the given order, or return the fallback
    when the merged set is empty. Partial provider data is never mixed with fallback data.
    """
    combined = [record for result in results if result.ok for record in result.records]
    merged = merge(combined)
    if merged:
        return merged
    failed = [r.provider for r in results if not r.ok]
    logger.info("[aggregation:resolve] no live records (failed=%s); using fallback", failed)
    return fallback()


@dataclass(frozen=True)
class Operation:
    """A logical query: how to ask one provider, how to reduce, what to fall back to."""

    name: str
    ttl_ms: int
    required: tuple[str, ...]
    optional: tuple[str, ...]
    call: Callable[[ProviderAdapter, dict[str, Any]], Awaitable[list[Any]]]
    merge: Callable[[list[Any], dict[str, Any]], list[Any]]
    fallback: Callable[[dict[str, Any]], list[Any]]


def _merge_law_firms(firms: list[LawFirm], args: dict[str, Any]) -> list[LawFirm]:
    return filter_law_firms(dedupe_law_firms(firms), args.get("specialty"), args.get("location"))


def _fallback_law_firms(args: dict[str, Any]) -> list[LawFirm]:
    """Fallback firms filtered by specialty only; the full list if nothing matches."""
    firms = fallback_law_firms()
    matching = filter_law_firms(firms, specialty=args.get("specialty"))
    return matching or firms


class AggregationService:
    """
    Fan-out/merge/fallback engine with its own cache tier.

    Args:
        providers: Adapters in priority order (earlier wins on duplicates).
        cache: Cache store for this tier.
        ttls: Optional per-operation TTL overrides in ms.
    """

    def __init__(
        self,
        providers: Sequence[ProviderAdapter],
        cache: CacheStore,
        ttls: dict[str, int] | None = None,
    ) -> None:
        self.providers = list(providers)
        self.cache = cache
        ttls = ttls or {}
        self._operations: dict[str, Operation] = {
            OP_ARTICLES: Operation(
                name=OP_ARTICLES,
                ttl_ms=ttls.get(OP_ARTICLES, ARTICLES_TTL_MS),
                required=(),
                optional=(),
                call=lambda p, a: p.get_articles(),
                merge=lambda records, a: dedupe_articles(records),
                fallback=lambda a: fallback_articles(),
            ),
            OP_LAW_FIRMS: Operation(
                name=OP_LAW_FIRMS,
                ttl_ms=ttls.get(OP_LAW_FIRMS, LAW_FIRMS_TTL_MS),
                required=(),
                optional=("specialty", "location"),
                call=lambda p, a: p.get_law_firms(a.get("specialty"), a.get("location")),
                merge=_merge_law_firms,
                fallback=_fallback_law_firms,
            ),
            OP_SETTLEMENTS: Operation(
                name=OP_SETTLEMENTS,
                ttl_ms=ttls.get(OP_SETTLEMENTS, SETTLEMENTS_TTL_MS),
                required=("condition",),
                optional=("state",),
                call=lambda p, a: p.get_settlements(a["condition"], a.get("state")),
                merge=lambda records, a: merge_settlements(records),
                fallback=lambda a: fallback_settlements(a["condition"], a.get("state")),
            ),
        }

    @property
    def provider_names(self) -> list[str]:
        return [p.name for p in self.providers]

    def _normalize_arguments(self, operation: Operation, arguments: dict[str, Any]) -> dict[str, Any]:
        allowed = set(operation.required) | set(operation.optional)
        unexpected = sorted(set(arguments) - allowed)
        if unexpected:
            raise InternalUsageError(f"Unexpected arguments for {operation.name!r}: {', '.join(unexpected)}")
        normalized: dict[str, Any] = {}
        for name in sorted(allowed):
            value = arguments.get(name)
            if value is not None and not isinstance(value, str):
                raise InternalUsageError(f"Argument {name!r} for {operation.name!r} must be a string")
            value = (value or "").strip() or None
            if value is None and name in operation.required:
                raise InternalUsageError(f"Argument {name!r} is required for {operation.name!r}")
            normalized[name] = value
        return normalized

    async def _call_provider(self, provider: ProviderAdapter, operation: Operation, args: dict[str, Any]) -> ProviderResult:
        """Run one provider call; any provider-side failure becomes an empty, errored ProviderResult."""
        try:
            records = await operation.call(provider, args)
        except InternalUsageError:
            raise
        except ProviderError as e:
            logger.warning("[aggregation:%s] provider=%s failed: %s", operation.name, provider.name, e.message)
            return ProviderResult(provider=provider.name, error=e)
        except Exception as e:
            logger.exception("[aggregation:%s] provider=%s raised unexpectedly", operation.name, provider.name)
            return ProviderResult(provider=provider.name, error=e)
        logger.info("[aggregation:%s] provider=%s records=%d", operation.name, provider.name, len(records))
        return ProviderResult(provider=provider.name, records=list(records))

    async def aggregate(self, operation_name: str, **arguments: Any) -> list[Any]:
        """
        Resolve one logical query: cache -> concurrent provider calls -> ordered merge
        -> dedupe -> fallback if empty -> cache. Raises InternalUsageError only.
        """
        operation = self._operations.get(operation_name)
        if operation is None:
            raise InternalUsageError(
                f"Unknown operation {operation_name!r}; expected one of {sorted(self._operations)}"
            )
        args = self._normalize_arguments(operation, arguments)
        key = make_cache_key(operation.name, **args)
        logger.info("[aggregation:%s] IN  key=%s providers=%s", operation.name, key, self.provider_names)

        cached = self.cache.get(key, operation.ttl_ms)
        if cached is not None:
            return list(cached)

        # gather keeps input order, so results line up with provider priority
        results = await asyncio.gather(*(self._call_provider(p, operation, args) for p in self.providers))
        records = resolve_results(
            results,
            merge=lambda combined: operation.merge(combined, args),
            fallback=lambda: operation.fallback(args),
        )
        self.cache.set(key, records)
        logger.info("[aggregation:%s] OUT records=%d sources=%s",
                    operation.name, len(records), sorted({r.source.value for r in records}))
        return list(records)

    async def get_articles(self) -> list[Article]:
        return await self.aggregate(OP_ARTICLES)

    async def get_law_firms(self, specialty: str | None = None, location: str | None = None) -> list[LawFirm]:
        return await self.aggregate(OP_LAW_FIRMS, specialty=specialty, location=location)

    async def get_settlements(self, condition: str, state: str | None = None) -> list[SettlementRecord]:
        return await self.aggregate(OP_SETTLEMENTS, condition=condition, state=state)

    def clear_cache(self) -> int:
        return self.cache.clear()
