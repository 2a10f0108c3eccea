from datetime import datetime, timedelta, timezone

from packages.market_insights.analytics import (
    run_liquidity_analysis,
    run_top_movers,
    run_volume_trends,
)
from packages.market_insights.models import DirectionFilter, MetricKind, MetricSample, TrendDirection

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _snapshot_rows():
    """Three pairs, three snapshots each, newest first like the store returns them."""
    rows = []
    history = {
        "BTCUSD": [(0.05, 9e8, 1.0), (0.05, 1.0e9, 2.0), (0.06, 1.2e9, 3.5)],
        "ETHUSD": [(0.10, 4e8, -1.0), (0.12, 3e8, -4.0), (0.11, 1.5e8, -8.0)],
        "DOGEUSD": [(6.00, 8e3, 0.5), (7.00, 9e3, 0.0), (None, 1e4, 12.0)],
    }
    for symbol, points in history.items():
        for minute, (spread, volume, change) in enumerate(points):
            rows.append(
                MetricSample(
                    symbol=symbol,
                    timestamp=T0 + timedelta(minutes=minute * 5),
                    spread_percent=spread,
                    volume_24h_usd=volume,
                    daily_change_percent=change,
                )
            )
    rows.sort(key=lambda s: s.timestamp, reverse=True)
    return rows


def test_liquidity_analysis_end_to_end():
    report = run_liquidity_analysis(_snapshot_rows())

    assert [a.symbol for a in report.data] == ["BTCUSD", "ETHUSD", "DOGEUSD"]
    doge = report.data[-1]
    assert doge.liquidity_status == "poor"
    # The spread-less DOGE snapshot is not counted
    assert doge.snapshot_count == 2
    assert doge.current_spread == 7.0
    assert report.aggregate_stats.total_pairs_analyzed == 3
    assert report.aggregate_stats.pairs_with_poor_liquidity == 1
    assert report.aggregate_stats.pairs_with_good_liquidity == 2


def test_liquidity_limit_keeps_full_aggregate_stats():
    report = run_liquidity_analysis(_snapshot_rows(), limit=1)

    assert [a.symbol for a in report.data] == ["BTCUSD"]
    assert report.aggregate_stats.total_pairs_analyzed == 3


def test_liquidity_spread_prefilter():
    report = run_liquidity_analysis(_snapshot_rows(), min_spread=0.0, max_spread=5.0)
    assert "DOGEUSD" not in {a.symbol for a in report.data}
    assert report.aggregate_stats.total_pairs_analyzed == 2


def test_liquidity_empty_input():
    report = run_liquidity_analysis([])
    assert report.data == []
    assert report.aggregate_stats.avg_spread_all_pairs == 0


def test_top_movers_price_direction_down():
    movers = run_top_movers(_snapshot_rows(), metric=MetricKind.PRICE, direction=DirectionFilter.DOWN)

    assert [m.symbol for m in movers] == ["ETHUSD"]
    assert movers[0].change_percent == -8.0
    assert movers[0].trend_direction == TrendDirection.DOWN


def test_top_movers_volume_both():
    movers = run_top_movers(_snapshot_rows(), metric=MetricKind.VOLUME)

    # ETH 3e8 -> 1.5e8 (-50%), BTC 1e9 -> 1.2e9 (+20%), DOGE 9e3 -> 1e4 (+11.1%)
    assert [m.symbol for m in movers] == ["ETHUSD", "BTCUSD", "DOGEUSD"]
    assert all(m.metric == MetricKind.VOLUME for m in movers)


def test_volume_trends_end_to_end():
    trends = run_volume_trends(_snapshot_rows(), limit=2)
    assert [t.symbol for t in trends] == ["ETHUSD", "BTCUSD"]
    assert trends[0].max_volume == 4e8


def test_runs_are_idempotent():
    rows = _snapshot_rows()

    first = run_liquidity_analysis(rows)
    second = run_liquidity_analysis(rows)
    assert [a.model_dump_json() for a in first.data] == [a.model_dump_json() for a in second.data]
    assert first.aggregate_stats == second.aggregate_stats

    movers_a = run_top_movers(rows, metric=MetricKind.SPREAD)
    movers_b = run_top_movers(list(reversed(rows)), metric=MetricKind.SPREAD)
    assert [m.model_dump_json() for m in movers_a] == [m.model_dump_json() for m in movers_b]
