"""
Pydantic models for snapshot samples and derived analytics records.
Used for validation and serialization throughout the application.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MetricKind(str, Enum):
    """Metric that feeds the trend classifier."""
    VOLUME = "volume"
    PRICE = "price"
    SPREAD = "spread"

    @property
    def sample_field(self) -> str:
        """MetricSample attribute holding this metric's value."""
        return _METRIC_FIELDS[self]


_METRIC_FIELDS = {
    MetricKind.VOLUME: "volume_24h_usd",
    MetricKind.PRICE: "daily_change_percent",
    MetricKind.SPREAD: "spread_percent",
}


class TrendDirection(str, Enum):
    """Coarse trend label derived from the +/-5% band."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class DirectionFilter(str, Enum):
    """Direction filter accepted by the top movers query."""
    UP = "up"
    DOWN = "down"
    BOTH = "both"


class LiquidityStatus(str, Enum):
    """Three-level liquidity bucket."""
    POOR = "poor"
    MODERATE = "moderate"
    GOOD = "good"


def _to_optional_float(value: Any) -> Optional[float]:
    """Coerce a raw field to float, mapping missing or malformed values to None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


# =============================================================================
# Snapshot Samples
# =============================================================================

class MetricSample(BaseModel):
    """
    One (symbol, timestamp, metric values) observation.

    Numeric fields are None when the upstream source had no value; 0 is a
    real value and is kept as such.
    """
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1)
    timestamp: datetime
    spread_percent: Optional[float] = None
    volume_24h_usd: Optional[float] = None
    last_price: Optional[float] = None
    daily_change_percent: Optional[float] = None

    @field_validator(
        "spread_percent",
        "volume_24h_usd",
        "last_price",
        "daily_change_percent",
        mode="before",
    )
    @classmethod
    def coerce_metric(cls, v: Any) -> Optional[float]:
        return _to_optional_float(v)

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC so samples always compare."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    def metric_value(self, metric: MetricKind) -> Optional[float]:
        return getattr(self, metric.sample_field)


@dataclass
class SymbolSeries:
    """
    Chronological values for one symbol (oldest first).

    `volumes` is parallel to `values` only when the series was built with
    volume attached; otherwise it stays empty.
    """
    symbol: str
    values: list[float] = field(default_factory=list)
    timestamps: list[datetime] = field(default_factory=list)
    volumes: list[float] = field(default_factory=list)

    def append(self, value: float, ts: datetime, volume: Optional[float] = None) -> None:
        self.values.append(value)
        self.timestamps.append(ts)
        if volume is not None:
            self.volumes.append(volume)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def latest_timestamp(self) -> Optional[datetime]:
        return self.timestamps[-1] if self.timestamps else None

    @property
    def earliest_timestamp(self) -> Optional[datetime]:
        return self.timestamps[0] if self.timestamps else None


# =============================================================================
# Derived Records
# =============================================================================

class LiquidityAnalysis(BaseModel):
    """Liquidity statistics and score for one trading pair."""
    symbol: str
    avg_spread: float
    min_spread: float
    max_spread: float
    median_spread: float
    spread_volatility: float
    current_spread: float
    previous_spread: float
    spread_change_percent: float
    avg_volume_24h: float
    liquidity_score: float = Field(..., ge=0, le=100)
    liquidity_status: LiquidityStatus
    snapshot_count: int
    latest_timestamp: datetime


class TopMover(BaseModel):
    """Latest-vs-previous movement of one metric for one trading pair."""
    symbol: str
    metric: MetricKind
    current_value: float
    previous_value: float
    earliest_value: float
    change_percent: float
    absolute_change: float
    period_change_percent: float
    trend_direction: TrendDirection
    snapshot_count: int
    latest_timestamp: datetime


class VolumeTrend(BaseModel):
    """24h volume trend for one trading pair."""
    symbol: str
    current_volume: float
    previous_volume: float
    avg_volume: float
    max_volume: float
    min_volume: float
    change_percent: float
    trend_direction: TrendDirection
    snapshot_count: int
    latest_timestamp: datetime
    earliest_timestamp: datetime


class AggregateStats(BaseModel):
    """Corpus-wide summary of a liquidity analysis."""
    total_pairs_analyzed: int = 0
    avg_spread_all_pairs: float = 0.0
    pairs_with_poor_liquidity: int = 0
    pairs_with_moderate_liquidity: int = 0
    pairs_with_good_liquidity: int = 0


# =============================================================================
# API Response Models
# =============================================================================

class LiquidityAnalysisResponse(BaseModel):
    success: bool = True
    data: list[LiquidityAnalysis] = Field(default_factory=list)
    aggregate_stats: AggregateStats = Field(default_factory=AggregateStats)
    period_hours: int
    timestamp: datetime
    message: Optional[str] = None


class TopMoversResponse(BaseModel):
    success: bool = True
    data: list[TopMover] = Field(default_factory=list)
    metric: MetricKind
    direction: DirectionFilter
    period_hours: int
    timestamp: datetime
    message: Optional[str] = None


class VolumeTrendsResponse(BaseModel):
    success: bool = True
    data: list[VolumeTrend] = Field(default_factory=list)
    period_hours: int
    timestamp: datetime
    message: Optional[str] = None
