"""
Lazy, process-wide database connection pool.

The pool is created on first use rather than at startup, so the
application can boot (and answer preflight or validation failures)
without a database, and a missing DATABASE_URL only surfaces on the
first request that needs storage.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from psycopg import Connection
from psycopg_pool import ConnectionPool

from src.config.settings import Settings
from src.domain.exceptions import ConfigurationError

from .postgres import run_migrations

logger = logging.getLogger(__name__)


class ConnectionProvider:
    """
    Owns the shared ConnectionPool.

    Initialization is guarded by a lock and happens at most once per
    successful attempt; a failed attempt is not cached, so the next
    caller retries. Exposes connection() with the same shape as
    ConnectionPool so repositories accept either.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._pool: ConnectionPool | None = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> ConnectionPool:
        """
        Return the shared pool, creating it on first access.

        Raises:
            ConfigurationError: If DATABASE_URL is not set
            RuntimeError: If migrations fail
        """
        if self._pool is not None:
            return self._pool

        with self._lock:
            if self._pool is None:
                self._pool = self._create_pool()
        return self._pool

    def _create_pool(self) -> ConnectionPool:
        settings = self._settings
        if not settings.database_url:
            logger.error("DATABASE_URL is not configured")
            raise ConfigurationError("DATABASE_URL")

        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            timeout=settings.pool_timeout_seconds,
            open=True,
        )
        try:
            run_migrations(pool)
        except Exception:
            pool.close()
            raise
        logger.info("Database connection pool ready")
        return pool

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        with self.pool.connection() as conn:
            yield conn

    def close(self) -> None:
        with self._lock:
            if self._pool is not None:
                self._pool.close()
                self._pool = None
                logger.info("Database connection pool closed")
