"""Top movers ranking by absolute percent change."""

from typing import Iterable, Union

from packages.market_insights.models import DirectionFilter, TopMover, TrendDirection, VolumeTrend


def rank_by_abs_change(
    records: Iterable[Union[TopMover, VolumeTrend]],
    limit: int,
) -> list:
    """
    Biggest absolute change first, truncated to `limit`.

    Equal magnitudes are ordered by symbol so repeated runs agree.
    """
    ordered = sorted(records, key=lambda r: (-abs(r.change_percent), r.symbol))
    return ordered[:max(limit, 0)]


def filter_direction(
    movers: Iterable[TopMover],
    direction: DirectionFilter,
) -> list[TopMover]:
    """Keep movers whose trend label matches; 'both' keeps everything."""
    if direction == DirectionFilter.BOTH:
        return list(movers)
    wanted = TrendDirection(direction.value)
    return [m for m in movers if m.trend_direction == wanted]


def rank_top_movers(
    movers: Iterable[TopMover],
    direction: DirectionFilter = DirectionFilter.BOTH,
    limit: int = 10,
) -> list[TopMover]:
    """Direction filter first, then the top-N by |change_percent|."""
    return rank_by_abs_change(filter_direction(movers, direction), limit)
