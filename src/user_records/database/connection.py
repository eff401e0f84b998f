"""
Database gateway and pool management
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import asyncpg

logger = logging.getLogger(__name__)

# Driver and transport failures surfaced as PersistenceError
DATABASE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


class PersistenceError(RuntimeError):
    """Raised by a gateway when a statement cannot be executed"""


class PersistenceGateway(ABC):
    """Parameterized statement execution against the table store"""

    @abstractmethod
    async def execute(self, query: str, *params: Any) -> int:
        """Run a statement and return the number of affected rows"""

    @abstractmethod
    async def query(self, query: str, *params: Any) -> List[Dict[str, Any]]:
        """Run a query and return its rows as dictionaries"""

    async def close(self) -> None:
        """Release any resources held by the gateway"""


def parse_affected_rows(status: str) -> int:
    """
    Extract the row count from an asyncpg command status tag

    "UPDATE 1" -> 1, "INSERT 0 1" -> 1, "CREATE TABLE" -> 0
    """
    if not status:
        return 0
    last = status.rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


class PostgresGateway(PersistenceGateway):
    """Gateway backed by an asyncpg connection pool created on first use"""

    def __init__(
        self,
        dsn: str,
        min_size: int = 0,
        max_size: int = 10,
        command_timeout: Optional[float] = 60,
    ):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: Optional[asyncpg.Pool] = None
        self._pool_lock = asyncio.Lock()

    async def _get_pool(self) -> asyncpg.Pool:
        if self._pool is not None:
            return self._pool

        async with self._pool_lock:
            if self._pool is None:
                try:
                    self._pool = await asyncpg.create_pool(
                        self.dsn,
                        min_size=self.min_size,
                        max_size=self.max_size,
                        command_timeout=self.command_timeout,
                        statement_cache_size=0  # pgbouncer compatibility
                    )
                except DATABASE_ERRORS as e:
                    raise PersistenceError(f"Database connection failed: {e}") from e
                logger.info("Database pool created")
        return self._pool

    async def execute(self, query: str, *params: Any) -> int:
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                status = await conn.execute(query, *params)
        except DATABASE_ERRORS as e:
            logger.error(f"Database error during execute: {e}")
            raise PersistenceError(f"Database statement failed: {e}") from e
        return parse_affected_rows(status)

    async def query(self, query: str, *params: Any) -> List[Dict[str, Any]]:
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except DATABASE_ERRORS as e:
            logger.error(f"Database error during query: {e}")
            raise PersistenceError(f"Database query failed: {e}") from e
        return [dict(row) for row in rows]

    async def close(self) -> None:
        """Close database connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        logger.info("Database connections closed")
