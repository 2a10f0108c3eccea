"""
Raw SQL queries for trading pair snapshots.
Rows come back newest first and are mapped to MetricSample values.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from pydantic import ValidationError

from packages.market_insights.models import MetricSample
from packages.market_insights.settings import settings
from packages.market_insights.storage.db import get_db_pool

logger = logging.getLogger(__name__)

UNKNOWN_SYMBOL = "UNKNOWN"


@dataclass
class SnapshotQueries:
    """
    SQL query methods for snapshot reads.
    Uses raw SQL for performance and explicit control.
    """
    
    @staticmethod
    def get_pair_snapshots(
        hours: int = 24,
        symbol: Optional[str] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[dict]:
        """
        Fetch trading pair snapshots inside the lookback window.
        
        Args:
            hours: Lookback window in hours
            symbol: Optional exact-match pair symbol
            limit: Row cap, applied only without a symbol filter
                (defaults to settings.snapshot_row_limit)
            now: Reference time for the window (defaults to current UTC time)
            
        Returns:
            Snapshot rows ordered by snapshot_timestamp DESC
        """
        db = get_db_pool()
        since = (now or datetime.now(timezone.utc)) - timedelta(hours=hours)
        
        conditions = ["s.snapshot_timestamp >= %s"]
        params: list = [since]
        
        if symbol:
            conditions.append("tp.symbol = %s")
            params.append(symbol)
        
        query = f"""
            SELECT
                tp.symbol,
                s.spread_percent,
                s.volume_24h_usd,
                s.last_price,
                s.daily_change_percent,
                s.snapshot_timestamp
            FROM trading_pair_snapshots s
            LEFT JOIN trading_pairs tp ON s.trading_pair_id = tp.id
            WHERE {' AND '.join(conditions)}
            ORDER BY s.snapshot_timestamp DESC
        """
        
        if not symbol:
            query += " LIMIT %s"
            params.append(limit or settings.snapshot_row_limit)
        
        return db.execute(query, tuple(params), fetch=True) or []


def rows_to_samples(rows: Iterable[dict]) -> list[MetricSample]:
    """
    Map snapshot rows to MetricSample values, keeping row order.
    
    Rows without a joined pair are filed under UNKNOWN. Rows that cannot be
    read at all (no timestamp) are dropped.
    """
    samples = []
    dropped = 0
    for row in rows:
        try:
            samples.append(
                MetricSample(
                    symbol=row.get("symbol") or UNKNOWN_SYMBOL,
                    timestamp=row.get("snapshot_timestamp"),
                    spread_percent=row.get("spread_percent"),
                    volume_24h_usd=row.get("volume_24h_usd"),
                    last_price=row.get("last_price"),
                    daily_change_percent=row.get("daily_change_percent"),
                )
            )
        except ValidationError:
            dropped += 1
    
    if dropped:
        logger.warning(f"Dropped {dropped} unreadable snapshot rows")
    return samples
