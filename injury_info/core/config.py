"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Google Sheets (spreadsheet provider)
GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "").strip()
GOOGLE_SPREADSHEET_ID: str = os.getenv("GOOGLE_SPREADSHEET_ID", "").strip()
GOOGLE_SHEETS_BASE_URL: str = (
    os.getenv("GOOGLE_SHEETS_BASE_URL", "https://sheets.googleapis.com/v4/spreadsheets").strip()
    or "https://sheets.googleapis.com/v4/spreadsheets"
)

# HubSpot (CRM/CMS provider)
HUBSPOT_ACCESS_TOKEN: str = os.getenv("HUBSPOT_ACCESS_TOKEN", "").strip()
HUBSPOT_PORTAL_ID: str = os.getenv("HUBSPOT_PORTAL_ID", "").strip()
HUBSPOT_BASE_URL: str = (
    os.getenv("HUBSPOT_BASE_URL", "https://api.hubapi.com").strip() or "https://api.hubapi.com"
)

# Transport timeout for every provider request (seconds)
PROVIDER_HTTP_TIMEOUT: float = float(os.getenv("PROVIDER_HTTP_TIMEOUT", "15.0") or 15.0)

# Cache TTLs (milliseconds). Façade tier is short-lived; aggregation tier follows data volatility.
FACADE_CACHE_TTL_MS: int = 5 * 60 * 1000
ARTICLES_TTL_MS: int = 30 * 60 * 1000
LAW_FIRMS_TTL_MS: int = 60 * 60 * 1000
SETTLEMENTS_TTL_MS: int = 2 * 60 * 60 * 1000

# Spreadsheet collections
SHEET_MEDICAL_CONDITIONS: str = "Medical Conditions"
SHEET_LEGAL_CASES: str = "Legal Cases"
SHEET_MANUFACTURER_CASES: str = "Manufacturer Cases"
SHEET_LAW_FIRMS: str = "Law Firms"
SHEET_SETTLEMENTS: str = "Settlements"
ARTICLE_SHEETS: tuple[str, ...] = (
    SHEET_MEDICAL_CONDITIONS,
    SHEET_LEGAL_CASES,
    SHEET_MANUFACTURER_CASES,
)

# Provider query limits
HUBSPOT_ARTICLE_LIMIT: int = 50
HUBSPOT_LAW_FIRM_LIMIT: int = 20
SHEETS_SETTLEMENT_LIMIT: int = 20
HUBSPOT_SETTLEMENT_LIMIT: int = 20
DEFAULT_SEARCH_LIMIT: int = 10

# Condition summary: characters of article overview kept
SUMMARY_OVERVIEW_CHARS: int = 200
