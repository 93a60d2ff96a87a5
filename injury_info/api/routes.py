"""
API route aggregator: register endpoints and delegate to handlers / façade. No logic here.
"""

import logging

from fastapi import APIRouter, Depends

from injury_info.api.handlers import handle_get_article, handle_search, handle_settlements
from injury_info.dependencies import get_facade
from injury_info.schemas.records import Article, LawFirm, SettlementRecord
from injury_info.schemas.search import ConditionSearch
from injury_info.services.query_facade import QueryFacade

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Injury info backend running"}


@router.get("/health", tags=["system"])
def health(facade: QueryFacade = Depends(get_facade)):
    return {"ok": True, "providers": facade.provider_names}


# --- Content ---

@router.get(
    "/api/articles",
    response_model=list[Article],
    tags=["content"],
    summary="List all articles",
    description="Merged articles from the spreadsheet and CRM, deduplicated by title. Falls back to built-in articles when no provider has data.",
)
async def list_articles(facade: QueryFacade = Depends(get_facade)) -> list[Article]:
    return await facade.get_all_articles()


@router.get(
    "/api/articles/{slug}",
    response_model=Article,
    tags=["content"],
    summary="Get one article by slug",
    description="404 if no article has this slug.",
)
async def get_article(slug: str, facade: QueryFacade = Depends(get_facade)) -> Article:
    return await handle_get_article(facade, slug)


@router.get(
    "/api/law-firms",
    response_model=list[LawFirm],
    tags=["content"],
    summary="Find law firms",
    description="Optional case-insensitive filters on specialty and location.",
)
async def list_law_firms(
    specialty: str | None = None,
    location: str | None = None,
    facade: QueryFacade = Depends(get_facade),
) -> list[LawFirm]:
    return await facade.get_law_firms(specialty, location)


@router.get(
    "/api/settlements",
    response_model=list[SettlementRecord],
    tags=["content"],
    summary="Settlement data for a condition",
    description="400 if condition is missing. State is optional.",
)
async def list_settlements(
    condition: str = "",
    state: str | None = None,
    facade: QueryFacade = Depends(get_facade),
) -> list[SettlementRecord]:
    return await handle_settlements(facade, condition, state)


@router.get(
    "/api/search/{condition}",
    response_model=ConditionSearch,
    tags=["content"],
    summary="Everything about one condition",
    description="Matching articles, law firms and settlements fetched concurrently, plus a short summary.",
)
async def search_condition(condition: str, facade: QueryFacade = Depends(get_facade)) -> ConditionSearch:
    return await handle_search(facade, condition)


# --- Admin ---

@router.post("/api/cache/clear", tags=["admin"], summary="Clear all cached query results")
def clear_cache(facade: QueryFacade = Depends(get_facade)) -> dict:
    removed = facade.clear_cache()
    logger.info("[api:clear_cache] removed=%d", removed)
    return {"cleared": True, "entries_removed": removed}
