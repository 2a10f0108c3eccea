from typing import Sequence

from packages.market_insights.models import AggregateStats, LiquidityAnalysis, LiquidityStatus


def summarize_liquidity(analysis: Sequence[LiquidityAnalysis]) -> AggregateStats:
    """
    Reduce a liquidity analysis to pair counts and the mean spread.

    An empty analysis yields zeros everywhere.
    """
    if not analysis:
        return AggregateStats()

    counts = {status: 0 for status in LiquidityStatus}
    for record in analysis:
        counts[record.liquidity_status] += 1

    return AggregateStats(
        total_pairs_analyzed=len(analysis),
        avg_spread_all_pairs=sum(a.avg_spread for a in analysis) / len(analysis),
        pairs_with_poor_liquidity=counts[LiquidityStatus.POOR],
        pairs_with_moderate_liquidity=counts[LiquidityStatus.MODERATE],
        pairs_with_good_liquidity=counts[LiquidityStatus.GOOD],
    )
