"""
Author Service

Business logic for authors. Routers call this; it calls AuthorRepository.
"""

from uuid import UUID

from app.models import Author
from app.repositories import AuthorRepository
from app.schemas import AuthorCreate


class AuthorService:
    """Create and read authors."""

    def __init__(self, repository: AuthorRepository) -> None:
        self.repository = repository

    async def create_author(self, req: AuthorCreate) -> Author:
        """
        Create an author from the request.

        A name collision surfaces the repository's DuplicateError unchanged.
        """
        return await self.repository.create(Author(name=req.name))

    async def get_author_by_id(self, author_id: UUID) -> Author:
        return await self.repository.get_by_id(author_id)
