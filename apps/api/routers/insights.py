"""
Insights router - Liquidity, top movers and volume trend analytics.

Every route degrades to `success: true` with empty data when the snapshot
store is missing or unreachable, so the dashboard never errors out.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query, Request, Response

from apps.api.limiter import limiter
from packages.market_insights.analytics import (
    run_liquidity_analysis,
    run_top_movers,
    run_volume_trends,
)
from packages.market_insights.models import (
    DirectionFilter,
    LiquidityAnalysisResponse,
    MetricKind,
    MetricSample,
    TopMoversResponse,
    VolumeTrendsResponse,
)
from packages.market_insights.settings import settings
from packages.market_insights.storage import (
    SnapshotQueries,
    StorageNotConfiguredError,
    rows_to_samples,
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_CONFIGURED_MESSAGE = "Insights not available - database not configured"
UNAVAILABLE_MESSAGE = "Insights temporarily unavailable"


# ============================================================================
# Snapshot loading
# ============================================================================

async def fetch_samples(hours: int, symbol: Optional[str] = None) -> list[MetricSample]:
    """Run the blocking snapshot query off the event loop, bounded by a timeout."""
    rows = await asyncio.wait_for(
        asyncio.to_thread(SnapshotQueries.get_pair_snapshots, hours=hours, symbol=symbol),
        timeout=settings.upstream_fetch_timeout,
    )
    return rows_to_samples(rows)


async def load_samples(
    hours: int,
    symbol: Optional[str] = None,
) -> tuple[list[MetricSample], Optional[str]]:
    """
    Fetch samples for a request.

    Returns:
        (samples, message) - message is set when the store could not be read
    """
    if not settings.storage_configured:
        return [], NOT_CONFIGURED_MESSAGE

    try:
        samples = await fetch_samples(hours, symbol)
    except StorageNotConfiguredError:
        return [], NOT_CONFIGURED_MESSAGE
    except asyncio.TimeoutError:
        logger.warning(f"Snapshot fetch timed out after {settings.upstream_fetch_timeout}s")
        return [], UNAVAILABLE_MESSAGE
    except Exception:
        logger.exception("Failed to fetch trading pair snapshots")
        return [], UNAVAILABLE_MESSAGE

    return samples, None


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Public Endpoints (rate limited)
# ============================================================================

@router.get(
    "/liquidity-analysis",
    response_model=LiquidityAnalysisResponse,
    response_model_exclude_none=True,
)
@limiter.limit(settings.rate_limit_public_api)
async def get_liquidity_analysis(
    request: Request,
    response: Response,
    symbol: Optional[str] = None,
    hours: int = Query(default=settings.default_lookback_hours, ge=1, le=settings.max_lookback_hours),
    limit: int = Query(default=settings.default_top_n, ge=1, le=settings.max_top_n),
    min_spread: float = Query(default=0.0, ge=0),
    max_spread: float = Query(default=100.0, ge=0),
):
    """Liquidity score and spread statistics per trading pair, best first."""
    samples, message = await load_samples(hours, symbol)
    report = run_liquidity_analysis(
        samples,
        min_spread=min_spread,
        max_spread=max_spread,
        limit=limit,
    )

    return LiquidityAnalysisResponse(
        data=report.data,
        aggregate_stats=report.aggregate_stats,
        period_hours=hours,
        timestamp=_now(),
        message=message,
    )


@router.get(
    "/top-movers",
    response_model=TopMoversResponse,
    response_model_exclude_none=True,
)
@limiter.limit(settings.rate_limit_public_api)
async def get_top_movers(
    request: Request,
    response: Response,
    symbol: Optional[str] = None,
    metric: MetricKind = MetricKind.VOLUME,
    direction: DirectionFilter = DirectionFilter.BOTH,
    hours: int = Query(default=settings.default_lookback_hours, ge=1, le=settings.max_lookback_hours),
    limit: int = Query(default=settings.default_top_n, ge=1, le=settings.max_top_n),
):
    """Pairs with the largest latest-vs-previous change for a metric."""
    samples, message = await load_samples(hours, symbol)
    movers = run_top_movers(samples, metric=metric, direction=direction, limit=limit)

    return TopMoversResponse(
        data=movers,
        metric=metric,
        direction=direction,
        period_hours=hours,
        timestamp=_now(),
        message=message,
    )


@router.get(
    "/volume-trends",
    response_model=VolumeTrendsResponse,
    response_model_exclude_none=True,
)
@limiter.limit(settings.rate_limit_public_api)
async def get_volume_trends(
    request: Request,
    response: Response,
    symbol: Optional[str] = None,
    hours: int = Query(default=settings.default_lookback_hours, ge=1, le=settings.max_lookback_hours),
    limit: int = Query(default=settings.default_top_n, ge=1, le=settings.max_top_n),
):
    """24h volume trend per pair, biggest change first."""
    samples, message = await load_samples(hours, symbol)
    trends = run_volume_trends(samples, limit=limit)

    return VolumeTrendsResponse(
        data=trends,
        period_hours=hours,
        timestamp=_now(),
        message=message,
    )
