"""
Book Service

Business rules the repository cannot see:

- a book can only be created for an author that exists right now
- an empty catalogue is reported as "not found", not as an empty list
- deleting reads the book first, so a missing id is a 404 instead of a
  silent no-op
"""

import logging
from typing import List
from uuid import UUID

from app.errors import DomainError, InvalidAuthorIdError, NotFoundError
from app.models import Book
from app.repositories import AuthorRepository, BookRepository
from app.schemas import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


class BookService:
    """
    Orchestrates BookRepository and AuthorRepository.

    Both repositories are injected at construction, so tests can pass
    AsyncMock(spec=...) stand-ins.
    """

    def __init__(
        self,
        repository: BookRepository,
        author_repository: AuthorRepository,
    ) -> None:
        self.repository = repository
        self.author_repository = author_repository

    async def create_book(self, req: BookCreate) -> Book:
        """
        Create a book for an existing author.

        Raises:
            InvalidAuthorIdError: If req.author_id is not a UUID
            NotFoundError: (author) If the author lookup failed for any reason
            DuplicateError: (book) If the title is taken
        """
        try:
            author_id = UUID(req.author_id)
        except ValueError as exc:
            raise InvalidAuthorIdError() from exc

        try:
            author = await self.author_repository.get_by_id(author_id)
        except DomainError as exc:
            # Any lookup failure reads as "no such author" to the client.
            if not isinstance(exc, NotFoundError):
                logger.warning(f"Author lookup failed while creating book: {exc}")
            raise NotFoundError("author") from exc

        book = Book(
            title=req.title,
            description=req.description,
            author_id=author.id,
        )
        return await self.repository.create(book)

    async def get_all_books(self) -> List[Book]:
        """
        List every book.

        Raises:
            NotFoundError: (book) If there are no books at all
        """
        books = await self.repository.get_all()
        if not books:
            raise NotFoundError("book")
        return books

    async def get_book_by_id(self, book_id: UUID) -> Book:
        return await self.repository.get_by_id(book_id)

    async def update_book(self, req: BookUpdate, book_id: UUID) -> Book:
        """
        Replace a book's description.

        Raises:
            NotFoundError: (book) If the book does not exist
        """
        book = await self.repository.get_by_id(book_id)
        book.description = req.description
        return await self.repository.update(book)

    async def delete_book(self, book_id: UUID) -> None:
        """
        Delete a book.

        Raises:
            NotFoundError: (book) If the book does not exist
        """
        await self.repository.get_by_id(book_id)
        await self.repository.delete(book_id)
