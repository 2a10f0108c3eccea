"""
Market Insights - API Service

FastAPI backend for the market dashboard:
- Liquidity analysis per trading pair
- Top movers by volume, price change or spread
- Volume trends
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from apps.api.limiter import limiter
from apps.api.routers import insights, system
from packages.market_insights.settings import settings
from packages.market_insights.storage.db import get_db_pool, reset_db_pool

logger = logging.getLogger("api")


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup."""
    _configure_logging()
    if settings.storage_configured:
        try:
            get_db_pool()
        except Exception:
            # Routes fall back to empty insights until the store is reachable
            logger.exception("Database pool initialization failed")
    else:
        logger.warning("DATABASE_URL not set; insights will be empty")
    yield
    reset_db_pool()


app = FastAPI(
    title="Market Insights API",
    description="Liquidity, top movers and volume trend analytics for trading pairs",
    version="1.0.0",
    lifespan=lifespan,
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(insights.router, prefix="/insights", tags=["Insights"])
app.include_router(system.router, prefix="/system", tags=["System"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "api"}


@app.get("/")
async def root():
    """API root."""
    return {
        "name": "Market Insights API",
        "version": "1.0.0",
        "docs": "/docs",
    }
