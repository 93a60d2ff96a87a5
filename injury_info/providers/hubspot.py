"""
CRM provider: HubSpot CRM v3 object search and CMS v3 page search.

Responsibility: Query HubSpot for condition pages (articles), law-firm companies
and settlement_data custom objects, and map them to records.
"""

import logging
import re
from typing import Any

import httpx

from injury_info.core.config import (
    HUBSPOT_ARTICLE_LIMIT,
    HUBSPOT_BASE_URL,
    HUBSPOT_LAW_FIRM_LIMIT,
    HUBSPOT_SETTLEMENT_LIMIT,
    PROVIDER_HTTP_TIMEOUT,
)
from injury_info.core.errors import ConfigurationMissingError, ProviderUnavailableError
from injury_info.providers.base import ProviderAdapter
from injury_info.schemas.records import Article, ArticleContent, LawFirm, SettlementRecord, Source
from injury_info.services.text_utils import clean_html

logger = logging.getLogger(__name__)

PAGES = "pages"
COMPANIES = "companies"
SETTLEMENT_DATA = "settlement_data"
MANUFACTURER_CASES = "manufacturer_cases"

PAGE_CONTENT_TYPES = ["landing-page", "website-page", "blog-post"]

# Properties requested per CRM object type
OBJECT_PROPERTIES: dict[str, list[str]] = {
    COMPANIES: [
        "name",
        "city",
        "state",
        "phone",
        "website",
        "law_firm_specialties",
        "years_of_experience",
        "success_rate",
        "notable_settlements",
    ],
    SETTLEMENT_DATA: [
        "condition_name",
        "applicable_states",
        "base_settlement_min",
        "base_settlement_max",
        "average_settlement",
        "total_cases",
        "last_updated",
    ],
    MANUFACTURER_CASES: [
        "manufacturer_name",
        "product_name",
        "allegation",
        "case_status",
        "total_settlements",
        "total_cases",
        "settlement_range_min",
        "settlement_range_max",
    ],
}

_TAG_CATEGORIES = {
    "cancer": "Cancer",
    "lung-disease": "Lung Disease",
    "occupational-disease": "Occupational Disease",
}
_TITLE_SUFFIX = re.compile(r"\s*(Information|Guide|Overview)\s*$", re.IGNORECASE)


def extract_condition_name(title: str) -> str:
    """'Mesothelioma Guide' -> 'Mesothelioma'."""
    return _TITLE_SUFFIX.sub("", title or "").strip()


def category_from_tags(tags: list[str] | None) -> str:
    for tag in tags or []:
        category = _TAG_CATEGORIES.get(str(tag).lower())
        if category:
            return category
    return "medical"


def extract_labelled_list(body: str, label: str) -> list[str]:
    """Items after 'label:' up to the next period, e.g. 'Symptoms: cough, fatigue.'"""
    match = re.search(rf"{label}s?[:\s]+([^.]+)", body, re.IGNORECASE)
    if not match:
        return []
    return [item.strip() for item in match.group(1).split(",") if item.strip()]


def _split_semicolons(value: Any) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in str(value).split(";") if item.strip()]


def _money(value: Any) -> str:
    try:
        return f"${int(float(value)):,}"
    except (TypeError, ValueError):
        return str(value or "").strip()


def map_page(page: dict[str, Any]) -> Article | None:
    """Map a CMS page to an Article. Pages without a usable title are skipped (None)."""
    title = extract_condition_name(page.get("name") or page.get("htmlTitle") or "")
    if not title:
        return None
    description = clean_html(page.get("metaDescription"))
    body = clean_html(page.get("postBody"))
    return Article(
        id=f"hubspot_{page.get('id')}",
        source=Source.CRM,
        title=title,
        description=description,
        category=category_from_tags(page.get("tagList")),
        date=page.get("updatedAt"),
        url=page.get("url"),
        content=ArticleContent(
            overview=description,
            symptoms=extract_labelled_list(body, "symptom"),
            causes=extract_labelled_list(body, "cause"),
        ),
    )


def map_company(row: dict[str, Any]) -> LawFirm | None:
    """Map a flattened company row (id + properties) to a LawFirm."""
    name = (row.get("name") or "").strip()
    if not name:
        return None
    location = ", ".join(p for p in ((row.get("city") or "").strip(), (row.get("state") or "").strip()) if p)
    return LawFirm(
        id=f"hubspot_firm_{row.get('id')}",
        source=Source.CRM,
        name=name,
        location=location,
        phone=row.get("phone"),
        website=row.get("website"),
        specialties=_split_semicolons(row.get("law_firm_specialties")),
        experience=row.get("years_of_experience"),
        success_rate=row.get("success_rate"),
        notable_settlements=_split_semicolons(row.get("notable_settlements")),
    )


def map_settlement(row: dict[str, Any], state: str | None = None) -> SettlementRecord | None:
    """Map a flattened settlement_data row. The range is rendered as '$min to $max' when both bounds exist."""
    condition = (row.get("condition_name") or "").strip()
    if not condition:
        return None
    low, high = row.get("base_settlement_min"), row.get("base_settlement_max")
    settlement_range = f"{_money(low)} to {_money(high)}" if low and high else ""
    average = row.get("average_settlement") or ""
    if not average and low and high:
        try:
            average = _money((float(low) + float(high)) / 2)
        except (TypeError, ValueError):
            average = ""
    return SettlementRecord(
        id=f"hubspot_settlement_{row.get('id')}",
        source=Source.CRM,
        condition=condition,
        state=row.get("applicable_states") or state or "",
        settlement_range=settlement_range,
        average_settlement=average,
        total_cases=row.get("total_cases"),
        year=str(row.get("last_updated") or "")[:4],
    )


class HubSpotAdapter(ProviderAdapter):
    """HubSpot CRM/CMS content: condition pages, law-firm companies, settlement data."""

    name = "hubspot"
    source = Source.CRM
    collections = frozenset({PAGES, COMPANIES, SETTLEMENT_DATA, MANUFACTURER_CASES})

    def __init__(
        self,
        access_token: str,
        portal_id: str = "",
        client: httpx.AsyncClient | None = None,
        timeout: float = PROVIDER_HTTP_TIMEOUT,
        base_url: str = HUBSPOT_BASE_URL,
    ) -> None:
        if not access_token:
            raise ConfigurationMissingError(self.name, "HUBSPOT_ACCESS_TOKEN")
        super().__init__(client=client, timeout=timeout)
        self.portal_id = portal_id
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

    async def _post_search(self, path: str, body: dict[str, Any]) -> list[dict[str, Any]]:
        data = await self._request_json("POST", f"{self.base_url}{path}", json=body, headers=self.headers)
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise ProviderUnavailableError(self.name, f"unexpected response shape from {path}")
        return results

    async def _search_pages(self, query: str = "", limit: int = HUBSPOT_ARTICLE_LIMIT) -> list[dict[str, Any]]:
        body = {"query": query, "limit": limit, "contentTypes": PAGE_CONTENT_TYPES}
        return await self._post_search("/cms/v3/pages/search", body)

    async def _search_objects(
        self,
        object_type: str,
        filters: list[dict[str, str]] | None = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """CRM object search; rows are flattened to {'id': ..., **properties}."""
        body: dict[str, Any] = {
            "filterGroups": [{"filters": filters}] if filters else [],
            "properties": OBJECT_PROPERTIES.get(object_type, []),
            "limit": limit,
        }
        results = await self._post_search(f"/crm/v3/objects/{object_type}/search", body)
        return [{"id": r.get("id"), **(r.get("properties") or {})} for r in results]

    async def _fetch(self, name: str) -> list[dict[str, Any]]:
        if name == PAGES:
            return await self._search_pages()
        return await self._search_objects(name)

    async def get_articles(self) -> list[Article]:
        pages = await self._search_pages("", HUBSPOT_ARTICLE_LIMIT)
        articles = [a for a in (map_page(p) for p in pages) if a is not None]
        logger.info("[hubspot:get_articles] OUT pages=%d articles=%d", len(pages), len(articles))
        return articles

    async def get_law_firms(self, specialty: str | None = None, location: str | None = None) -> list[LawFirm]:
        filters = [{"propertyName": "industry", "operator": "EQ", "value": "Legal Services"}]
        if specialty and specialty.strip():
            filters.append({"propertyName": "law_firm_specialties", "operator": "CONTAINS_TOKEN", "value": specialty.strip()})
        if location and location.strip():
            filters.append({"propertyName": "city", "operator": "CONTAINS_TOKEN", "value": location.strip()})
        rows = await self._search_objects(COMPANIES, filters, HUBSPOT_LAW_FIRM_LIMIT)
        firms = [f for f in (map_company(r) for r in rows) if f is not None]
        logger.info("[hubspot:get_law_firms] OUT firms=%d", len(firms))
        return firms

    async def get_settlements(self, condition: str, state: str | None = None) -> list[SettlementRecord]:
        filters = [{"propertyName": "condition_name", "operator": "EQ", "value": condition.strip().lower()}]
        if state and state.strip():
            filters.append({"propertyName": "applicable_states", "operator": "CONTAINS_TOKEN", "value": state.strip()})
        rows = await self._search_objects(SETTLEMENT_DATA, filters, HUBSPOT_SETTLEMENT_LIMIT)
        records = [r for r in (map_settlement(row, state) for row in rows) if r is not None]
        logger.info("[hubspot:get_settlements] OUT records=%d", len(records))
        return records
