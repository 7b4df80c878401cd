"""
Book Repository

Persistence for Book rows.

Reads always resolve the author with joinedload(), which SQLAlchemy emits
as a LEFT OUTER JOIN because books.author_id is nullable. A book without
an author comes back with author = None rather than being dropped.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from app.errors import NotFoundError
from app.models import Book
from app.repositories.base import BaseRepository


class BookRepository(BaseRepository):
    """CRUD operations on books."""

    entity = "book"

    async def create(self, book: Book) -> Book:
        """
        Insert a new book and resolve its author.

        Raises:
            DuplicateError: If a book with the same title exists
            InternalError: For any other database failure
        """
        self.session.add(book)
        await self._commit()
        await self._load_author(book)
        return book

    async def get_all(self) -> list[Book]:
        """
        Fetch every book with its author.

        Returns:
            All books, oldest first. An empty list is a valid answer here.

        Raises:
            InternalError: If the query failed
        """
        stmt = (
            select(Book)
            .options(joinedload(Book.author))
            .order_by(Book.created_at, Book.title)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise self._internal("retrieving", exc) from exc
        return list(result.scalars().all())

    async def get_by_id(self, book_id: UUID) -> Book:
        """
        Fetch one book with its author.

        Raises:
            NotFoundError: If no book has this id
            InternalError: If the query failed
        """
        stmt = (
            select(Book)
            .options(joinedload(Book.author))
            .where(Book.id == book_id)
        )
        try:
            book = (await self.session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise self._internal("retrieving", exc) from exc

        if book is None:
            raise NotFoundError(self.entity)
        return book

    async def update(self, book: Book) -> Book:
        """
        Save the full row by primary key.

        Session.merge() copies every attribute of ``book`` onto the
        persistent instance with the same id (inserting it if none
        exists), so this is an upsert rather than a partial patch.

        Raises:
            DuplicateError: If the new title collides with another book
            InternalError: For any other database failure
        """
        try:
            merged = await self.session.merge(book)
        except SQLAlchemyError as exc:
            raise self._internal("merging", exc) from exc
        await self._commit()
        await self._load_author(merged)
        return merged

    async def delete(self, book_id: UUID) -> None:
        """
        Delete a book by id.

        Deleting an id that matches no row is not an error.

        Raises:
            InternalError: If the statement failed
        """
        try:
            await self.session.execute(delete(Book).where(Book.id == book_id))
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise self._internal("deleting", exc) from exc
        await self._commit()

    async def _load_author(self, book: Book) -> None:
        """Populate book.author after a write so callers never lazy-load."""
        try:
            await self.session.refresh(book, attribute_names=["author"])
        except SQLAlchemyError as exc:
            raise self._internal("loading author of", exc) from exc
