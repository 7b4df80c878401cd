"""
Base repository with shared error translation.

The Repository pattern separates data access logic from business logic.
Repositories are the only layer that talks to SQLAlchemy; everything they
raise is a DomainError from app.errors:

- a uniqueness violation becomes DuplicateError
- a missing row becomes NotFoundError (in the concrete repositories)
- any other SQLAlchemyError becomes InternalError, with the driver
  exception chained as __cause__ for the server-side log

Example:
    class AuthorRepository(BaseRepository):
        entity = "author"

        async def get_by_id(self, author_id: UUID) -> Author:
            ...
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import DuplicateError, InternalError

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL, also used by MySQL drivers)
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Tell a uniqueness violation apart from other integrity errors.

    asyncpg exposes the SQLSTATE as ``sqlstate``, psycopg as ``pgcode``;
    SQLite only reports it in the message text.

    Args:
        exc: The IntegrityError raised by SQLAlchemy

    Returns:
        True if the error was caused by a UNIQUE constraint
    """
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    message = str(orig).lower()
    return "unique constraint" in message or "duplicate" in message


class BaseRepository:
    """
    Common plumbing for the concrete repositories.

    Attributes:
        session: The request-scoped AsyncSession
        entity: Entity name attached to every raised DomainError
    """

    entity: str = "entity"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _commit(self) -> None:
        """
        Commit the pending unit of work, translating failures.

        The session is rolled back before any error is raised so it stays
        usable for the rest of the request.

        Raises:
            DuplicateError: If a UNIQUE constraint rejected the write
            InternalError: For any other database failure
        """
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if is_unique_violation(exc):
                logger.warning(f"Duplicate {self.entity} rejected by database: {exc.orig}")
                raise DuplicateError(self.entity) from exc
            logger.error(f"Integrity error on {self.entity}: {exc}")
            raise InternalError(self.entity) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error(f"Database error on {self.entity}: {exc}")
            raise InternalError(self.entity) from exc

    def _internal(self, action: str, exc: SQLAlchemyError) -> InternalError:
        """Log a read failure and build the opaque error to raise."""
        logger.error(f"Error when {action} {self.entity}: {exc}")
        return InternalError(self.entity, f"failed {action} {self.entity}")
