"""
Database connection handler with connection pooling.
Backs the snapshot store the insight routes read from.
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from packages.market_insights.settings import settings

logger = logging.getLogger(__name__)


class StorageNotConfiguredError(RuntimeError):
    """Raised when no snapshot store connection string is configured."""


class DatabasePool:
    """
    Singleton database connection pool manager.
    
    Uses psycopg3 (psycopg) with a psycopg_pool ConnectionPool.
    """
    
    _instance: Optional["DatabasePool"] = None
    _pool: Optional[ConnectionPool] = None
    
    def __new__(cls) -> "DatabasePool":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def initialize(self, conninfo: Optional[str] = None) -> None:
        """
        Initialize the connection pool.
        
        Args:
            conninfo: PostgreSQL connection string. Defaults to settings.database_url
            
        Raises:
            StorageNotConfiguredError: if neither conninfo nor settings provide a URL
        """
        if self._pool is not None:
            logger.warning("Connection pool already initialized")
            return
        
        db_url = conninfo or settings.database_url
        if not db_url:
            raise StorageNotConfiguredError("DATABASE_URL is not set")
        
        logger.info("Initializing database connection pool...")
        self._pool = ConnectionPool(
            conninfo=db_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout=settings.db_connection_timeout,
            open=True,
            kwargs={"row_factory": dict_row},
        )
        logger.info(
            f"Database pool initialized (min={settings.db_pool_min_size}, "
            f"max={settings.db_pool_max_size})"
        )
    
    @property
    def pool(self) -> ConnectionPool:
        """Get the connection pool, initializing if needed."""
        if self._pool is None:
            self.initialize()
        return self._pool
    
    @contextmanager
    def get_cursor(self) -> Generator[psycopg.Cursor, None, None]:
        """
        Get a read cursor from the pool.
        
        Usage:
            with db_pool.get_cursor() as cur:
                cur.execute("SELECT * FROM trading_pairs")
                results = cur.fetchall()
        """
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                yield cur
    
    def execute(
        self,
        query: str,
        params: Optional[tuple] = None,
        fetch: bool = False,
    ) -> Optional[list[dict]]:
        """
        Execute a query with optional parameter binding.
        
        Returns:
            List of dicts if fetch=True, else None
        """
        with self.get_cursor() as cur:
            cur.execute(query, params)
            if fetch:
                return cur.fetchall()
        return None
    
    def health_check(self) -> bool:
        """
        Check if the database connection is healthy.
        
        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self.execute("SELECT 1 as health", fetch=True)
            return result is not None and len(result) > 0
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False
    
    def close(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            logger.info("Closing database connection pool...")
            self._pool.close()
            self._pool = None
            DatabasePool._instance = None
            logger.info("Database pool closed")
    
    def get_pool_stats(self) -> dict:
        """Get connection pool statistics."""
        if self._pool is None:
            return {"status": "not_initialized"}
        
        stats = self._pool.get_stats()
        return {
            "status": "active",
            "min_size": self._pool.min_size,
            "max_size": self._pool.max_size,
            "size": stats.get("pool_size", 0),
            "available": stats.get("pool_available", 0),
        }


# Module-level singleton instance
_db_pool: Optional[DatabasePool] = None


def get_db_pool() -> DatabasePool:
    """
    Get or create the database pool singleton.
    
    Raises StorageNotConfiguredError when no DATABASE_URL is set.
    """
    global _db_pool
    if _db_pool is None:
        pool = DatabasePool()
        pool.initialize()
        _db_pool = pool
    return _db_pool


def peek_db_pool() -> Optional[DatabasePool]:
    """Return the pool if it was already created, without creating one."""
    return _db_pool


def reset_db_pool() -> None:
    """
    Reset the database pool (useful for testing).
    """
    global _db_pool
    if _db_pool is not None:
        _db_pool.close()
        _db_pool = None
