"""Group snapshot samples into per-symbol chronological series."""

import logging
from typing import Iterable

from packages.market_insights.models import MetricKind, MetricSample, SymbolSeries

logger = logging.getLogger(__name__)


def chronological(samples: Iterable[MetricSample]) -> list[MetricSample]:
    """
    Samples ordered oldest first.

    Storage hands rows over newest first; the sort is stable so samples that
    share a timestamp keep their received order.
    """
    return sorted(samples, key=lambda s: s.timestamp)


def build_series(
    samples: Iterable[MetricSample],
    metric: MetricKind,
    with_volume: bool = False,
) -> dict[str, SymbolSeries]:
    """
    Build one series per symbol for the given metric.

    A sample without a value for `metric` is skipped for this series only.
    Duplicate timestamps are not collapsed: each sample is one point.

    Args:
        samples: Unordered MetricSample rows, already limited to the lookback window
        metric: Which field supplies the series values
        with_volume: Attach a parallel 24h volume list (absent volume counts as 0)

    Returns:
        Mapping of symbol -> SymbolSeries, empty for empty input
    """
    series: dict[str, SymbolSeries] = {}
    skipped = 0

    for sample in chronological(samples):
        pair = series.get(sample.symbol)
        if pair is None:
            pair = series[sample.symbol] = SymbolSeries(symbol=sample.symbol)

        value = sample.metric_value(metric)
        if value is None:
            skipped += 1
            continue

        volume = None
        if with_volume:
            volume = sample.volume_24h_usd if sample.volume_24h_usd is not None else 0.0
        pair.append(value, sample.timestamp, volume)

    if skipped:
        logger.debug(f"Skipped {skipped} samples without a {metric.value} value")

    return series
