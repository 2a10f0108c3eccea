"""
Analytics engine for trading pair insights.

Exports:
- metrics: numeric helpers for changes, spread statistics and scores
- build_series: per-symbol chronological series from raw samples
- liquidity / trends / movers / summary: the scoring stages
- run_*: end-to-end computations used by the API
"""

from packages.market_insights.analytics import metrics
from packages.market_insights.analytics.series import build_series
from packages.market_insights.analytics.liquidity import (
    analyze_liquidity,
    filter_spread_range,
    score_liquidity,
)
from packages.market_insights.analytics.trends import (
    classify_trend,
    classify_trends,
    volume_trend,
)
from packages.market_insights.analytics.movers import (
    filter_direction,
    rank_by_abs_change,
    rank_top_movers,
)
from packages.market_insights.analytics.summary import summarize_liquidity
from packages.market_insights.analytics.engine import (
    LiquidityReport,
    run_liquidity_analysis,
    run_top_movers,
    run_volume_trends,
)

__all__ = [
    "metrics",
    "build_series",
    "analyze_liquidity",
    "filter_spread_range",
    "score_liquidity",
    "classify_trend",
    "classify_trends",
    "volume_trend",
    "filter_direction",
    "rank_by_abs_change",
    "rank_top_movers",
    "summarize_liquidity",
    "LiquidityReport",
    "run_liquidity_analysis",
    "run_top_movers",
    "run_volume_trends",
]
