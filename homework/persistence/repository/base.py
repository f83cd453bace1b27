"""Shared plumbing for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy.engine import Result
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from homework.domain.error import TransientStorageError


class PostgresRepository:
    """Base class holding the session and translating connectivity failures."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any) -> Result:
        """Execute a statement, raising TransientStorageError on connectivity loss.

        Integrity and programming errors propagate unchanged.
        """
        try:
            return await self.session.execute(stmt)
        except (OperationalError, InterfaceError, PoolTimeoutError) as e:
            logfire.warn("Database unavailable", error=str(e))
            raise TransientStorageError("Database unavailable") from e
        except DBAPIError as e:
            if e.connection_invalidated:
                logfire.warn("Database connection invalidated", error=str(e))
                raise TransientStorageError("Database connection lost") from e
            raise
