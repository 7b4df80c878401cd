"""
Author Repository

Persistence for Author rows. No business rules live here.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.errors import NotFoundError
from app.models import Author
from app.repositories.base import BaseRepository


class AuthorRepository(BaseRepository):
    """Create and look up authors."""

    entity = "author"

    async def create(self, author: Author) -> Author:
        """
        Insert a new author.

        The id is generated by the column default during flush.

        Raises:
            DuplicateError: If an author with the same name exists
            InternalError: For any other database failure
        """
        self.session.add(author)
        await self._commit()
        return author

    async def get_by_id(self, author_id: UUID) -> Author:
        """
        Fetch one author by primary key.

        Raises:
            NotFoundError: If no author has this id
            InternalError: If the query itself failed
        """
        stmt = select(Author).where(Author.id == author_id)
        try:
            author = (await self.session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise self._internal("retrieving", exc) from exc

        if author is None:
            raise NotFoundError(self.entity)
        return author
