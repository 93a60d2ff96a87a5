"""
Spreadsheet provider: Google Sheets v4 values API.

Responsibility: Read named sheets as header-keyed rows and map them to Article,
LawFirm and SettlementRecord. Column names follow the sheets maintained by the
content team; several alternates are accepted per field.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from injury_info.core.config import (
    ARTICLE_SHEETS,
    GOOGLE_SHEETS_BASE_URL,
    PROVIDER_HTTP_TIMEOUT,
    SHEET_LAW_FIRMS,
    SHEET_LEGAL_CASES,
    SHEET_MANUFACTURER_CASES,
    SHEET_MEDICAL_CONDITIONS,
    SHEET_SETTLEMENTS,
    SHEETS_SETTLEMENT_LIMIT,
)
from injury_info.core.errors import ConfigurationMissingError, ProviderUnavailableError
from injury_info.providers.base import ProviderAdapter, filter_rows
from injury_info.schemas.records import Article, ArticleContent, LawFirm, SettlementRecord, Source

logger = logging.getLogger(__name__)


def rows_from_values(values: list[list[Any]]) -> list[dict[str, str]]:
    """First row is the header; short rows are padded with ''."""
    if not values:
        return []
    headers = [str(h).strip() for h in values[0]]
    rows = []
    for raw in values[1:]:
        rows.append({
            header: (str(raw[i]) if i < len(raw) and raw[i] is not None else "")
            for i, header in enumerate(headers)
        })
    return rows


def _first(row: dict[str, str], *columns: str) -> str:
    """Value of the first listed column that is non-empty."""
    for column in columns:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return ""


def _row_id(row: dict[str, str], position: int) -> str:
    return _first(row, "ID") or str(position)


def map_article_row(row: dict[str, str], sheet: str, position: int) -> Article | None:
    """Map one row of an article sheet. Rows without a title are skipped (None)."""
    if sheet == SHEET_MEDICAL_CONDITIONS:
        prefix, category = "sheets_medical", "medical"
        title = _first(row, "Condition Name", "Name")
        overview = _first(row, "Description", "Medical Description")
        content = ArticleContent(
            overview=overview,
            symptoms=_first(row, "Symptoms", "Common Symptoms"),
            causes=_first(row, "Causes", "Risk Factors"),
            treatments=_first(row, "Treatments", "Treatment Options"),
            legal_options=_first(row, "Legal Options"),
            settlements=_first(row, "Settlements", "Settlement Range"),
        )
        date = _first(row, "Last Updated")
    elif sheet == SHEET_LEGAL_CASES:
        prefix, category = "sheets_legal", "legal"
        title = _first(row, "Case Name", "Name")
        overview = _first(row, "Description", "Case Summary")
        content = ArticleContent(
            overview=overview,
            causes=_first(row, "Alleged Causes"),
            legal_options=_first(row, "Legal Options"),
            settlements=_first(row, "Settlement Amount", "Settlements"),
        )
        date = _first(row, "Date Filed", "Last Updated")
    elif sheet == SHEET_MANUFACTURER_CASES:
        prefix, category = "sheets_manufacturer", "manufacturer"
        manufacturer = _first(row, "Manufacturer", "Company")
        product = _first(row, "Product")
        title = f"{manufacturer} - {product}" if manufacturer and product else manufacturer or product
        overview = _first(row, "Description", "Case Summary")
        content = ArticleContent(
            overview=overview,
            symptoms=_first(row, "Symptoms"),
            causes=_first(row, "Alleged Causes"),
            legal_options=_first(row, "Legal Options"),
            settlements=_first(row, "Settlement Amount", "Settlements"),
        )
        date = _first(row, "Date Filed", "Last Updated")
    else:
        logger.warning("[sheets:map_article_row] no article mapping for sheet %r", sheet)
        return None

    if not title:
        return None
    return Article(
        id=f"{prefix}_{_row_id(row, position)}",
        source=Source.SPREADSHEET,
        title=title,
        description=overview,
        category=category,
        date=date,
        content=content,
    )


def map_law_firm_row(row: dict[str, str], position: int) -> LawFirm | None:
    name = _first(row, "Name", "Firm Name")
    if not name:
        return None
    location = _first(row, "Location")
    if not location:
        location = ", ".join(p for p in (_first(row, "City"), _first(row, "State")) if p)
    return LawFirm(
        id=f"sheets_firm_{_row_id(row, position)}",
        source=Source.SPREADSHEET,
        name=name,
        location=location,
        phone=_first(row, "Phone"),
        website=_first(row, "Website"),
        specialties=_first(row, "Specialties"),
        experience=_first(row, "Years Experience", "Experience"),
        success_rate=_first(row, "Success Rate"),
        notable_settlements=_first(row, "Notable Settlements"),
    )


def map_settlement_row(row: dict[str, str], position: int) -> SettlementRecord | None:
    condition = _first(row, "Condition")
    if not condition:
        return None
    return SettlementRecord(
        id=f"sheets_settlement_{_row_id(row, position)}",
        source=Source.SPREADSHEET,
        condition=condition,
        state=_first(row, "State"),
        settlement_range=_first(row, "Settlement Range", "Settlements"),
        average_settlement=_first(row, "Average Settlement"),
        total_cases=_first(row, "Total Cases"),
        year=_first(row, "Year"),
    )


class GoogleSheetsAdapter(ProviderAdapter):
    """Spreadsheet-backed content: article sheets, law firms, settlements."""

    name = "google_sheets"
    source = Source.SPREADSHEET
    collections = frozenset({
        SHEET_MEDICAL_CONDITIONS,
        SHEET_LEGAL_CASES,
        SHEET_MANUFACTURER_CASES,
        SHEET_LAW_FIRMS,
        SHEET_SETTLEMENTS,
    })

    def __init__(
        self,
        api_key: str,
        spreadsheet_id: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = PROVIDER_HTTP_TIMEOUT,
        base_url: str = GOOGLE_SHEETS_BASE_URL,
    ) -> None:
        if not api_key:
            raise ConfigurationMissingError(self.name, "GOOGLE_API_KEY")
        if not spreadsheet_id:
            raise ConfigurationMissingError(self.name, "GOOGLE_SPREADSHEET_ID")
        super().__init__(client=client, timeout=timeout)
        self.api_key = api_key
        self.spreadsheet_id = spreadsheet_id
        self.base_url = base_url.rstrip("/")

    async def _fetch(self, name: str) -> list[dict[str, Any]]:
        url = f"{self.base_url}/{self.spreadsheet_id}/values/{quote(name, safe='')}"
        logger.info("[sheets:read] IN  sheet=%r", name)
        data = await self._request_json("GET", url, params={"majorDimension": "ROWS", "key": self.api_key})
        if not isinstance(data, dict):
            raise ProviderUnavailableError(self.name, f"unexpected response shape for sheet {name!r}")
        values = data.get("values") or []
        if not values:
            logger.warning("[sheets:read] no data in sheet %r", name)
        return rows_from_values(values)

    async def get_articles(self) -> list[Article]:
        """
        Read the three article sheets concurrently. A failing sheet is skipped;
        if all of them fail the first error is raised.
        """
        outcomes = await asyncio.gather(
            *(self.fetch_collection(sheet) for sheet in ARTICLE_SHEETS),
            return_exceptions=True,
        )
        articles: list[Article] = []
        errors: list[ProviderUnavailableError] = []
        for sheet, outcome in zip(ARTICLE_SHEETS, outcomes):
            if isinstance(outcome, ProviderUnavailableError):
                logger.warning("[sheets:get_articles] could not read sheet %r: %s", sheet, outcome.message)
                errors.append(outcome)
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            for position, row in enumerate(outcome, start=1):
                article = map_article_row(row, sheet, position)
                if article is not None:
                    articles.append(article)
        if errors and len(errors) == len(ARTICLE_SHEETS):
            raise errors[0]
        logger.info("[sheets:get_articles] OUT articles=%d", len(articles))
        return articles

    async def get_law_firms(self, specialty: str | None = None, location: str | None = None) -> list[LawFirm]:
        rows = await self.fetch_collection(SHEET_LAW_FIRMS)
        wanted_specialty = (specialty or "").strip().lower()
        wanted_location = (location or "").strip().lower()
        firms = []
        for position, row in enumerate(rows, start=1):
            if wanted_specialty and wanted_specialty not in (row.get("Specialties") or "").lower():
                continue
            firm = map_law_firm_row(row, position)
            if firm is None:
                continue
            # location may come from City/State when the Location column is blank
            if wanted_location and wanted_location not in firm.location.lower():
                continue
            firms.append(firm)
        logger.info("[sheets:get_law_firms] OUT firms=%d", len(firms))
        return firms

    async def get_settlements(self, condition: str, state: str | None = None) -> list[SettlementRecord]:
        rows = await self.fetch_collection(SHEET_SETTLEMENTS)
        found = filter_rows(rows, condition, field="Condition", limit=SHEETS_SETTLEMENT_LIMIT)
        # ids use the row's place in the sheet, not its place among the matches
        positions = {id(row): position for position, row in enumerate(rows, start=1)}
        wanted_state = (state or "").strip().lower()
        records = []
        for row in found.results:
            if wanted_state and wanted_state not in (row.get("State") or "").lower():
                continue
            record = map_settlement_row(row, positions[id(row)])
            if record is not None:
                records.append(record)
        logger.info("[sheets:get_settlements] OUT records=%d", len(records))
        return records
