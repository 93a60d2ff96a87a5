"""
API handlers: call the façade, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Usage errors become 400, a
missing article becomes 404. Lives in the API layer so services stay free of
FastAPI/HTTP types.
"""

from fastapi import HTTPException

from injury_info.core.errors import InternalUsageError
from injury_info.schemas.records import Article, SettlementRecord
from injury_info.schemas.search import ConditionSearch
from injury_info.services.query_facade import QueryFacade


async def handle_get_article(facade: QueryFacade, slug: str) -> Article:
    try:
        article = await facade.get_article(slug)
    except InternalUsageError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    if article is None:
        raise HTTPException(status_code=404, detail=f"Article not found: {slug!r}")
    return article


async def handle_settlements(facade: QueryFacade, condition: str, state: str | None) -> list[SettlementRecord]:
    if not condition or not condition.strip():
        raise HTTPException(status_code=400, detail="Query parameter 'condition' is required")
    try:
        return await facade.get_settlement_data(condition, state)
    except InternalUsageError as e:
        raise HTTPException(status_code=400, detail=e.message) from e


async def handle_search(facade: QueryFacade, condition: str) -> ConditionSearch:
    try:
        return await facade.search_condition(condition)
    except InternalUsageError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
