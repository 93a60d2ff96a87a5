"""
Service wiring: build providers, cache tiers, aggregation service and façade.

A provider whose credentials are missing is left out with a warning; the
service keeps working with the rest (or with fallback data only).
"""

import logging
from typing import Callable

import httpx
from fastapi import Request

from injury_info.core.cache_store import CacheStore
from injury_info.core.config import (
    GOOGLE_API_KEY,
    GOOGLE_SPREADSHEET_ID,
    HUBSPOT_ACCESS_TOKEN,
    HUBSPOT_PORTAL_ID,
)
from injury_info.core.errors import ConfigurationMissingError
from injury_info.providers.base import ProviderAdapter
from injury_info.providers.hubspot import HubSpotAdapter
from injury_info.providers.sheets import GoogleSheetsAdapter
from injury_info.services.aggregation_service import AggregationService
from injury_info.services.query_facade import QueryFacade

logger = logging.getLogger(__name__)


def build_providers(client: httpx.AsyncClient | None = None) -> list[ProviderAdapter]:
    """Configured adapters in merge priority order: spreadsheet first, then CRM."""
    factories: list[Callable[[], ProviderAdapter]] = [
        lambda: GoogleSheetsAdapter(GOOGLE_API_KEY, GOOGLE_SPREADSHEET_ID, client=client),
        lambda: HubSpotAdapter(HUBSPOT_ACCESS_TOKEN, HUBSPOT_PORTAL_ID, client=client),
    ]
    providers: list[ProviderAdapter] = []
    for factory in factories:
        try:
            provider = factory()
        except ConfigurationMissingError as e:
            logger.warning("[dependencies] provider %s disabled: %s", e.provider, e.message)
            continue
        logger.info("[dependencies] provider %s initialized", provider.name)
        providers.append(provider)
    return providers


def build_facade(providers: list[ProviderAdapter]) -> QueryFacade:
    """Façade over an aggregation service; each tier gets its own CacheStore."""
    aggregation = AggregationService(providers, CacheStore("aggregation"))
    return QueryFacade(aggregation, CacheStore("facade"))


def get_facade(request: Request) -> QueryFacade:
    """FastAPI dependency: the façade created at startup."""
    return request.app.state.facade
