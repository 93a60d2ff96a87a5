"""Schemas for provider searches and the condition search."""

from typing import Any

from pydantic import BaseModel, Field

from injury_info.schemas.records import Article, LawFirm, RecordModel, SettlementRecord


class SearchResult(BaseModel):
    """Rows matching a provider search. `total` counts every match, `results` holds at most `limit`."""

    results: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    query: str = ""
    field: str = Field("all", description="Column searched, or 'all' for every column.")


class ConditionSearch(RecordModel):
    """Response for GET /api/search/{condition}: everything known about one condition."""

    condition: str
    articles: list[Article] = Field(default_factory=list)
    law_firms: list[LawFirm] = Field(default_factory=list)
    settlements: list[SettlementRecord] = Field(default_factory=list)
    summary: str = ""
