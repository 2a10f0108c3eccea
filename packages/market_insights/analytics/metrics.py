import math
from typing import Sequence

from packages.market_insights.models import LiquidityStatus, TrendDirection

# Trend band (percent) between stable and up/down
TREND_THRESHOLD_PCT = 5.0

# Liquidity score weights
SPREAD_WEIGHT = 0.7
VOLUME_WEIGHT = 0.3

# Status thresholds
POOR_SPREAD_PCT = 5.0
POOR_VOLUME_USD = 10_000.0
MODERATE_SPREAD_PCT = 2.0
MODERATE_VOLUME_USD = 100_000.0


def calculate_pct_change(current: float, base: float) -> float:
    """
    Percent change from base to current.

    Formula: (current - base) / base * 100 when base > 0.
    With a non-positive base the change is 100 if current > 0, else 0.
    """
    if base > 0:
        return (current - base) / base * 100
    if current > 0:
        return 100.0
    return 0.0


def classify_trend_direction(change_percent: float) -> TrendDirection:
    """'up' above +5%, 'down' below -5%, otherwise 'stable'."""
    if change_percent > TREND_THRESHOLD_PCT:
        return TrendDirection.UP
    if change_percent < -TREND_THRESHOLD_PCT:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def floor_median(values: Sequence[float]) -> float:
    """
    Element at index floor(n/2) of the ascending-sorted values.

    For even n this is the upper of the two middle values, not their average.
    """
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def population_std(values: Sequence[float]) -> float:
    """Standard deviation dividing by n."""
    if not values:
        return 0.0
    avg = mean(values)
    variance = sum((v - avg) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def calculate_spread_score(avg_spread: float) -> float:
    """
    Formula: max(0, 100 - avg_spread * 10)
    Every 0.1% of average spread costs one point.
    """
    return min(100.0, max(0.0, 100 - avg_spread * 10))


def calculate_volume_score(avg_volume: float) -> float:
    """
    Formula: min(100, log10(avg_volume + 1) * 10)
    Log-compressed since 24h USD volume spans many orders of magnitude.
    """
    if avg_volume <= 0:
        return 0.0
    return min(100.0, math.log10(avg_volume + 1) * 10)


def calculate_liquidity_score(avg_spread: float, avg_volume: float) -> float:
    """Blend of spread score (70%) and volume score (30%), in [0, 100]."""
    score = (
        calculate_spread_score(avg_spread) * SPREAD_WEIGHT
        + calculate_volume_score(avg_volume) * VOLUME_WEIGHT
    )
    return min(100.0, max(0.0, score))


def classify_liquidity_status(avg_spread: float, avg_volume: float) -> LiquidityStatus:
    """First match wins: poor, then moderate, else good."""
    if avg_spread > POOR_SPREAD_PCT or avg_volume < POOR_VOLUME_USD:
        return LiquidityStatus.POOR
    if avg_spread > MODERATE_SPREAD_PCT or avg_volume < MODERATE_VOLUME_USD:
        return LiquidityStatus.MODERATE
    return LiquidityStatus.GOOD
