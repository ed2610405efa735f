"""Shared statement execution for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.error import ConflictError, RepositoryError

UNIQUE_VIOLATION = "23505"


def _sqlstate(error: IntegrityError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


class PostgresRepository:
    """Base for PostgreSQL repositories.

    Every statement goes through ``execute`` so driver errors surface as
    domain errors: unique violations as the caller's ``ConflictError``,
    everything else as ``RepositoryError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def execute(self, stmt: Any, conflict: ConflictError | None = None) -> Any:
        """Execute a statement on the request session.

        Args:
            stmt: SQLAlchemy statement
            conflict: Error to raise if the statement hits a unique constraint

        Returns:
            SQLAlchemy result
        """
        try:
            return await self.session.execute(stmt)
        except IntegrityError as e:
            if conflict is not None and _sqlstate(e) == UNIQUE_VIOLATION:
                logfire.warn(
                    "Unique constraint violated",
                    repository=type(self).__name__,
                    error=str(conflict),
                )
                raise conflict from e
            logfire.error(
                "Integrity error", repository=type(self).__name__, error=str(e)
            )
            raise RepositoryError(f"Integrity error in {type(self).__name__}") from e
        except SQLAlchemyError as e:
            logfire.error(
                "Database statement failed",
                repository=type(self).__name__,
                error=str(e),
            )
            raise RepositoryError(f"Database error in {type(self).__name__}") from e

    async def flush(self) -> None:
        """Flush pending changes to the database."""
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.error(
                "Database flush failed", repository=type(self).__name__, error=str(e)
            )
            raise RepositoryError(f"Database error in {type(self).__name__}") from e
