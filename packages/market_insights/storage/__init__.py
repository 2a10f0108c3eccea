# storage package
from packages.market_insights.storage.db import (
    DatabasePool,
    StorageNotConfiguredError,
    get_db_pool,
)
from packages.market_insights.storage.queries import SnapshotQueries, rows_to_samples

__all__ = [
    "DatabasePool",
    "StorageNotConfiguredError",
    "get_db_pool",
    "SnapshotQueries",
    "rows_to_samples",
]
