"""
Provider adapter contract: one external data source in, normalized records out.

Responsibility: Own request construction and raw-response parsing for a single
source. Transport and parse failures leave an adapter only as
ProviderUnavailableError; unknown collections yield an empty result and a
warning. Adapters never retry.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

from injury_info.core.config import DEFAULT_SEARCH_LIMIT, PROVIDER_HTTP_TIMEOUT
from injury_info.core.errors import InternalUsageError, ProviderUnavailableError
from injury_info.schemas.records import Article, LawFirm, SettlementRecord, Source
from injury_info.schemas.search import SearchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ProviderResult(Generic[T]):
    """Outcome of one provider call: its records, or the error that replaced them."""

    provider: str
    records: list[T] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def filter_rows(
    rows: list[dict[str, Any]],
    query: str,
    field: str | None = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> SearchResult:
    """
    Case-insensitive substring search over rows, in one column or across all.

    The column name is matched case-insensitively. A column that no row has
    yields an empty result with a warning.
    """
    if limit < 1:
        raise InternalUsageError(f"limit must be a positive integer, got {limit!r}")
    needle = (query or "").strip().lower()
    if field:
        wanted = field.strip().lower()
        column = next((key for row in rows for key in row if key.lower() == wanted), None)
        if column is None:
            if rows:
                logger.warning("[provider:search] column %r not found", field)
            return SearchResult(results=[], total=0, query=query, field=field)
        matches = [row for row in rows if needle in _cell(row.get(column)).lower()]
    else:
        matches = [row for row in rows if any(needle in _cell(v).lower() for v in row.values())]
    return SearchResult(results=matches[:limit], total=len(matches), query=query, field=field or "all")


class ProviderAdapter(ABC):
    """
    Base for provider adapters. Subclasses declare `name`, `source`, and the
    `collections` they know, and implement `_fetch` plus the three record getters.

    The httpx.AsyncClient is owned by the caller (app lifespan); without one a
    short-lived client is opened per request.
    """

    name: str = "provider"
    source: Source
    collections: frozenset[str] = frozenset()

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = PROVIDER_HTTP_TIMEOUT) -> None:
        self._client = client
        self._timeout = timeout

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send one request; return decoded JSON or raise ProviderUnavailableError."""
        try:
            if self._client is not None:
                response = await self._client.request(method, url, timeout=self._timeout, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(self.name, f"request failed: {e!s}") from e

        if not response.is_success:
            raise ProviderUnavailableError(
                self.name, f"HTTP {response.status_code} - {self._error_detail(response)}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise ProviderUnavailableError(self.name, f"invalid JSON response: {e!s}") from e

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or "Unknown error"
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if body.get("message"):
                return str(body["message"])
        return "Unknown error"

    async def fetch_collection(self, name: str) -> list[dict[str, Any]]:
        """All rows of a named collection; unknown names return [] with a warning."""
        if name not in self.collections:
            logger.warning("[%s:fetch_collection] unknown collection %r (known: %s)", self.name, name, sorted(self.collections))
            return []
        rows = await self._fetch(name)
        logger.info("[%s:fetch_collection] OUT collection=%r rows=%d", self.name, name, len(rows))
        return rows

    async def search(
        self,
        name: str,
        query: str,
        field: str | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> SearchResult:
        """Filter a collection's rows by case-insensitive substring, returning up to `limit` plus the full match count."""
        rows = await self.fetch_collection(name)
        result = filter_rows(rows, query, field=field, limit=limit)
        logger.info("[%s:search] OUT collection=%r query=%r matches=%d returned=%d",
                    self.name, name, query, result.total, len(result.results))
        return result

    @abstractmethod
    async def _fetch(self, name: str) -> list[dict[str, Any]]:
        """Retrieve and normalize the rows of a known collection."""

    @abstractmethod
    async def get_articles(self) -> list[Article]:
        ...

    @abstractmethod
    async def get_law_firms(self, specialty: str | None = None, location: str | None = None) -> list[LawFirm]:
        ...

    @abstractmethod
    async def get_settlements(self, condition: str, state: str | None = None) -> list[SettlementRecord]:
        ...
