"""
End-to-end insight computations.

Each function takes the samples fetched for one request and returns plain
result records. No I/O happens here; callers fetch first, then compute.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from packages.market_insights.analytics.liquidity import analyze_liquidity, filter_spread_range
from packages.market_insights.analytics.movers import rank_by_abs_change, rank_top_movers
from packages.market_insights.analytics.series import build_series
from packages.market_insights.analytics.summary import summarize_liquidity
from packages.market_insights.analytics.trends import classify_trends, volume_trend
from packages.market_insights.models import (
    AggregateStats,
    DirectionFilter,
    LiquidityAnalysis,
    MetricKind,
    MetricSample,
    TopMover,
    VolumeTrend,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiquidityReport:
    data: list[LiquidityAnalysis]
    aggregate_stats: AggregateStats


def run_liquidity_analysis(
    samples: Iterable[MetricSample],
    min_spread: float = 0.0,
    max_spread: float = 100.0,
    limit: int = 10,
) -> LiquidityReport:
    """
    Liquidity analysis for every pair in `samples`.

    Aggregate stats cover all scored pairs; `data` is cut to `limit`.
    """
    in_range = filter_spread_range(samples, min_spread=min_spread, max_spread=max_spread)
    series = build_series(in_range, MetricKind.SPREAD, with_volume=True)
    analysis = analyze_liquidity(series)
    stats = summarize_liquidity(analysis)
    logger.debug(
        f"Liquidity analysis: {len(in_range)} samples, {stats.total_pairs_analyzed} pairs"
    )
    return LiquidityReport(data=analysis[:max(limit, 0)], aggregate_stats=stats)


def run_top_movers(
    samples: Iterable[MetricSample],
    metric: MetricKind = MetricKind.VOLUME,
    direction: DirectionFilter = DirectionFilter.BOTH,
    limit: int = 10,
) -> list[TopMover]:
    """Top-N movers for one metric, optionally restricted to a direction."""
    series = build_series(samples, metric)
    movers = classify_trends(series, metric)
    ranked = rank_top_movers(movers, direction=direction, limit=limit)
    logger.debug(
        f"Top movers ({metric.value}, {direction.value}): "
        f"{len(ranked)} of {len(movers)} classified pairs"
    )
    return ranked


def run_volume_trends(samples: Iterable[MetricSample], limit: int = 10) -> list[VolumeTrend]:
    """Volume trends ranked by absolute change."""
    series = build_series(samples, MetricKind.VOLUME)
    trends = [t for t in (volume_trend(s) for s in series.values()) if t is not None]
    return rank_by_abs_change(trends, limit)
