# Run from project root: uvicorn injury_info.main:app --reload

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from injury_info.api.routes import router
from injury_info.core.config import PROVIDER_HTTP_TIMEOUT
from injury_info.dependencies import build_facade, build_providers
from injury_info.mcp.server import mcp_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Providers share one HTTP client; caches live as long as the process."""
    async with httpx.AsyncClient(timeout=PROVIDER_HTTP_TIMEOUT) as client:
        app.state.facade = build_facade(build_providers(client))
        logger.info("Injury info backend started with providers=%s", app.state.facade.provider_names)
        yield
        app.state.facade.clear_cache()


app = FastAPI(title="Injury Info Backend", lifespan=lifespan)
app.include_router(router)
app.include_router(mcp_router, prefix="/mcp")
