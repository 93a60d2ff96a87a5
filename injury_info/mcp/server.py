"""
Minimal MCP-style tool server: exposes the query façade as a standardized tool
interface for external agents (condition search, law firms, settlements,
articles, direct spreadsheet queries).
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from injury_info.core.config import DEFAULT_SEARCH_LIMIT
from injury_info.core.errors import InternalUsageError, ProviderUnavailableError
from injury_info.dependencies import get_facade
from injury_info.providers.sheets import GoogleSheetsAdapter
from injury_info.services.query_facade import QueryFacade

logger = logging.getLogger(__name__)

# MCP tool schema for discovery / documentation
tools = [
    {
        "name": "search_condition",
        "description": "Comprehensive report for a condition: matching articles, law firms, settlement data and a summary",
        "input_schema": {"condition": "string"},
    },
    {
        "name": "find_law_firms",
        "description": "Find law firms, optionally filtered by specialty and location",
        "input_schema": {"specialty": "string (optional)", "location": "string (optional)"},
    },
    {
        "name": "settlement_data",
        "description": "Settlement ranges for a condition, optionally for one state",
        "input_schema": {"condition": "string", "state": "string (optional)"},
    },
    {
        "name": "list_articles",
        "description": "All medical/legal articles (title, slug, category, source)",
        "input_schema": {},
    },
    {
        "name": "query_sheet",
        "description": "Search one Google Sheet by substring, in one column or across all columns",
        "input_schema": {"sheet": "string", "query": "string", "column": "string (optional)", "limit": "integer (optional)"},
    },
]

mcp_router = APIRouter(tags=["mcp"])


def _dump(records: list[Any]) -> list[dict[str, Any]]:
    return [r.model_dump(mode="json", by_alias=True) for r in records]


@mcp_router.get("/tools", summary="MCP tool catalogue")
def list_tools() -> dict[str, list[dict[str, Any]]]:
    return {"tools": tools}


# --- search_condition ---

class SearchConditionRequest(BaseModel):
    """Request body for MCP tool search_condition."""
    condition: str = ""


@mcp_router.post("/tools/search_condition", summary="MCP tool: search_condition")
async def mcp_search_condition(
    body: SearchConditionRequest,
    facade: QueryFacade = Depends(get_facade),
) -> dict[str, Any]:
    logger.info("MCP tool called: search_condition")
    try:
        result = await facade.search_condition(body.condition)
    except InternalUsageError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    return result.model_dump(mode="json", by_alias=True)


# --- find_law_firms ---

class FindLawFirmsRequest(BaseModel):
    """Request body for MCP tool find_law_firms."""
    specialty: str | None = None
    location: str | None = None


@mcp_router.post("/tools/find_law_firms", summary="MCP tool: find_law_firms")
async def mcp_find_law_firms(
    body: FindLawFirmsRequest,
    facade: QueryFacade = Depends(get_facade),
) -> dict[str, list[dict[str, Any]]]:
    logger.info("MCP tool called: find_law_firms")
    firms = await facade.get_law_firms(body.specialty, body.location)
    return {"law_firms": _dump(firms)}


# --- settlement_data ---

class SettlementDataRequest(BaseModel):
    """Request body for MCP tool settlement_data."""
    condition: str = ""
    state: str | None = None


@mcp_router.post("/tools/settlement_data", summary="MCP tool: settlement_data")
async def mcp_settlement_data(
    body: SettlementDataRequest,
    facade: QueryFacade = Depends(get_facade),
) -> dict[str, list[dict[str, Any]]]:
    logger.info("MCP tool called: settlement_data")
    try:
        records = await facade.get_settlement_data(body.condition, body.state)
    except InternalUsageError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    return {"settlements": _dump(records)}


# --- list_articles ---

@mcp_router.post("/tools/list_articles", summary="MCP tool: list_articles")
async def mcp_list_articles(facade: QueryFacade = Depends(get_facade)) -> dict[str, list[dict[str, Any]]]:
    logger.info("MCP tool called: list_articles")
    articles = await facade.get_all_articles()
    return {
        "articles": [
            {"id": a.id, "title": a.title, "slug": a.slug, "category": a.category, "source": a.source.value}
            for a in articles
        ]
    }


# --- query_sheet ---

class QuerySheetRequest(BaseModel):
    """Request body for MCP tool query_sheet."""
    sheet: str
    query: str = ""
    column: str | None = None
    limit: int = Field(DEFAULT_SEARCH_LIMIT, ge=1, le=500)


@mcp_router.post("/tools/query_sheet", summary="MCP tool: query_sheet")
async def mcp_query_sheet(
    body: QuerySheetRequest,
    facade: QueryFacade = Depends(get_facade),
) -> dict[str, Any]:
    """Unknown sheet -> empty results; spreadsheet not configured or unreachable -> 503."""
    logger.info("MCP tool called: query_sheet")
    try:
        result = await facade.query_provider(
            GoogleSheetsAdapter.name, body.sheet, body.query, field=body.column, limit=body.limit
        )
    except ProviderUnavailableError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    return result.model_dump()
