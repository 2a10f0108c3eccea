import math
from datetime import datetime, timedelta, timezone

from packages.market_insights.analytics.liquidity import (
    analyze_liquidity,
    filter_spread_range,
    score_liquidity,
)
from packages.market_insights.analytics.summary import summarize_liquidity
from packages.market_insights.models import LiquidityStatus, MetricSample, SymbolSeries

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _series(symbol, spreads, volumes):
    series = SymbolSeries(symbol=symbol)
    for i, (spread, volume) in enumerate(zip(spreads, volumes)):
        series.append(spread, T0 + timedelta(minutes=i), volume)
    return series


def test_wide_spread_low_volume_is_poor():
    """Spreads of 10% zero out the spread score."""
    record = score_liquidity(_series("XYZUSD", [10.0, 10.0, 10.0], [5000.0, 5000.0, 5000.0]))

    assert record.avg_spread == 10.0
    assert record.median_spread == 10.0
    assert record.spread_volatility == 0.0
    # volume score = log10(5001) * 10 ~= 36.99, weighted 0.3
    assert math.isclose(record.liquidity_score, math.log10(5001) * 10 * 0.3)
    assert math.isclose(record.liquidity_score, 11.1, abs_tol=0.01)
    assert record.liquidity_status == LiquidityStatus.POOR
    assert record.snapshot_count == 3


def test_single_sample_has_no_spread_change():
    record = score_liquidity(_series("BTCUSD", [0.4], [2_000_000.0]))

    assert record.current_spread == 0.4
    assert record.previous_spread == record.current_spread
    assert record.spread_change_percent == 0
    assert record.latest_timestamp == T0


def test_current_and_previous_are_latest_points():
    record = score_liquidity(_series("BTCUSD", [1.0, 2.0, 4.0, 3.0], [1e6] * 4))

    assert record.current_spread == 3.0
    assert record.previous_spread == 4.0
    assert record.spread_change_percent == -25.0
    assert record.min_spread == 1.0
    assert record.max_spread == 4.0
    # sorted [1, 2, 3, 4] -> index 2
    assert record.median_spread == 3.0
    assert record.avg_spread == 2.5


def test_zero_previous_spread_means_no_change():
    record = score_liquidity(_series("BTCUSD", [0.0, 1.0], [1e6, 1e6]))
    assert record.spread_change_percent == 0


def test_empty_series_yields_no_record():
    assert score_liquidity(SymbolSeries(symbol="EMPTY")) is None


def test_score_stays_in_range_for_extreme_inputs():
    tight = score_liquidity(_series("A", [0.0], [1e15]))
    negative = score_liquidity(_series("B", [-3.0], [-500.0]))
    wide = score_liquidity(_series("C", [99.0], [0.0]))

    for record in (tight, negative, wide):
        assert 0 <= record.liquidity_score <= 100
    assert math.isclose(tight.liquidity_score, 100.0)
    assert wide.liquidity_score == 0.0


def test_analyze_liquidity_sorts_best_first_and_drops_empty():
    series = {
        "POOR": _series("POOR", [8.0, 9.0], [1000.0, 1000.0]),
        "GOOD": _series("GOOD", [0.1, 0.1], [5e6, 5e6]),
        "EMPTY": SymbolSeries(symbol="EMPTY"),
        "MID": _series("MID", [3.0], [500_000.0]),
    }
    analysis = analyze_liquidity(series)

    assert [a.symbol for a in analysis] == ["GOOD", "MID", "POOR"]
    assert [a.liquidity_status for a in analysis] == [
        LiquidityStatus.GOOD,
        LiquidityStatus.MODERATE,
        LiquidityStatus.POOR,
    ]


def test_analyze_liquidity_ties_fall_back_to_symbol():
    series = {
        "ZZZ": _series("ZZZ", [1.0], [1e6]),
        "AAA": _series("AAA", [1.0], [1e6]),
    }
    assert [a.symbol for a in analyze_liquidity(series)] == ["AAA", "ZZZ"]


def test_filter_spread_range_is_inclusive():
    samples = [
        MetricSample(symbol="A", timestamp=T0, spread_percent=0.0),
        MetricSample(symbol="B", timestamp=T0, spread_percent=2.0),
        MetricSample(symbol="C", timestamp=T0, spread_percent=2.5),
        MetricSample(symbol="D", timestamp=T0),
    ]
    kept = filter_spread_range(samples, min_spread=0.0, max_spread=2.0)
    assert [s.symbol for s in kept] == ["A", "B"]


def test_summarize_liquidity():
    analysis = analyze_liquidity({
        "GOOD": _series("GOOD", [1.0], [5e6]),
        "MID": _series("MID", [3.0], [5e6]),
        "POOR": _series("POOR", [8.0], [5e6]),
    })
    stats = summarize_liquidity(analysis)

    assert stats.total_pairs_analyzed == 3
    assert stats.avg_spread_all_pairs == 4.0
    assert stats.pairs_with_good_liquidity == 1
    assert stats.pairs_with_moderate_liquidity == 1
    assert stats.pairs_with_poor_liquidity == 1


def test_summarize_empty_analysis_is_zero():
    stats = summarize_liquidity([])
    assert stats.total_pairs_analyzed == 0
    assert stats.avg_spread_all_pairs == 0
    assert stats.pairs_with_poor_liquidity == 0
