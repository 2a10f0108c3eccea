"""
Trend classification over a metric series.

Compares the two most recent points (and the period endpoints) of each
series and labels the move up, down or stable.
"""

from typing import Optional

from packages.market_insights.analytics import metrics
from packages.market_insights.models import MetricKind, SymbolSeries, TopMover, VolumeTrend

# Fewer points than this cannot produce a latest-vs-previous change
MIN_TREND_SAMPLES = 2


def classify_trend(series: SymbolSeries, metric: MetricKind) -> Optional[TopMover]:
    """
    Classify one series, or return None when it has fewer than two points.

    For the price metric the series already holds daily percent changes, so
    the latest value is reported as both change_percent and absolute_change.
    """
    values = series.values
    if len(values) < MIN_TREND_SAMPLES:
        return None

    current = values[-1]
    previous = values[-2]
    earliest = values[0]

    if metric == MetricKind.PRICE:
        change_percent = current
        absolute_change = current
    else:
        change_percent = metrics.calculate_pct_change(current, previous)
        absolute_change = current - previous

    return TopMover(
        symbol=series.symbol,
        metric=metric,
        current_value=current,
        previous_value=previous,
        earliest_value=earliest,
        change_percent=change_percent,
        absolute_change=absolute_change,
        period_change_percent=metrics.calculate_pct_change(current, earliest),
        trend_direction=metrics.classify_trend_direction(change_percent),
        snapshot_count=len(values),
        latest_timestamp=series.latest_timestamp,
    )


def classify_trends(
    series_by_symbol: dict[str, SymbolSeries],
    metric: MetricKind,
) -> list[TopMover]:
    """Classify every series with enough points, in symbol order."""
    records = []
    for symbol in sorted(series_by_symbol):
        record = classify_trend(series_by_symbol[symbol], metric)
        if record is not None:
            records.append(record)
    return records


def volume_trend(series: SymbolSeries) -> Optional[VolumeTrend]:
    """Summarize a 24h volume series, or None with fewer than two points."""
    volumes = series.values
    if len(volumes) < MIN_TREND_SAMPLES:
        return None

    current = volumes[-1]
    previous = volumes[-2]
    change_percent = metrics.calculate_pct_change(current, previous)

    return VolumeTrend(
        symbol=series.symbol,
        current_volume=current,
        previous_volume=previous,
        avg_volume=metrics.mean(volumes),
        max_volume=max(volumes),
        min_volume=min(volumes),
        change_percent=change_percent,
        trend_direction=metrics.classify_trend_direction(change_percent),
        snapshot_count=len(volumes),
        latest_timestamp=series.latest_timestamp,
        earliest_timestamp=series.earliest_timestamp,
    )
