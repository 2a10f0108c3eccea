"""
Liquidity scoring for trading pairs.

Turns a pair's spread series (with parallel 24h volume) into spread
statistics, a 0-100 liquidity score and a poor/moderate/good status.
"""

import logging
from typing import Iterable, Optional

from packages.market_insights.analytics import metrics
from packages.market_insights.models import LiquidityAnalysis, MetricSample, SymbolSeries

logger = logging.getLogger(__name__)


def filter_spread_range(
    samples: Iterable[MetricSample],
    min_spread: float = 0.0,
    max_spread: float = 100.0,
) -> list[MetricSample]:
    """Keep samples whose spread lies within [min_spread, max_spread]."""
    return [
        s for s in samples
        if s.spread_percent is not None and min_spread <= s.spread_percent <= max_spread
    ]


def score_liquidity(series: SymbolSeries) -> Optional[LiquidityAnalysis]:
    """
    Score one spread series.

    Returns None when the series holds no spread samples.
    """
    spreads = series.values
    if not spreads:
        return None

    avg_spread = metrics.mean(spreads)

    current_spread = spreads[-1]
    previous_spread = spreads[-2] if len(spreads) > 1 else current_spread
    spread_change = 0.0
    if previous_spread > 0:
        spread_change = (current_spread - previous_spread) / previous_spread * 100

    avg_volume = metrics.mean(series.volumes)

    return LiquidityAnalysis(
        symbol=series.symbol,
        avg_spread=avg_spread,
        min_spread=min(spreads),
        max_spread=max(spreads),
        median_spread=metrics.floor_median(spreads),
        spread_volatility=metrics.population_std(spreads),
        current_spread=current_spread,
        previous_spread=previous_spread,
        spread_change_percent=spread_change,
        avg_volume_24h=avg_volume,
        liquidity_score=metrics.calculate_liquidity_score(avg_spread, avg_volume),
        liquidity_status=metrics.classify_liquidity_status(avg_spread, avg_volume),
        snapshot_count=len(spreads),
        latest_timestamp=series.latest_timestamp,
    )


def analyze_liquidity(series_by_symbol: dict[str, SymbolSeries]) -> list[LiquidityAnalysis]:
    """
    Score every series, best liquidity first.

    Pairs without spread samples are left out. Equal scores fall back to
    symbol order.
    """
    analysis = []
    for series in series_by_symbol.values():
        record = score_liquidity(series)
        if record is None:
            continue
        analysis.append(record)

    analysis.sort(key=lambda a: (-a.liquidity_score, a.symbol))
    logger.debug(f"Scored liquidity for {len(analysis)}/{len(series_by_symbol)} pairs")
    return analysis
