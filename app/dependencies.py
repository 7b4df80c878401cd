"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: app.dependency_overrides swaps any of these for a fake
3. Separation of Concerns: Routes only translate HTTP <-> service calls
4. Lifecycle Management: FastAPI opens and closes the session per request

Wiring per request:

    get_db -> AsyncSession
      -> AuthorRepository / BookRepository
        -> AuthorService / BookService
          -> route handler
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Path, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.repositories import AuthorRepository, BookRepository
from app.services.authors import AuthorService
from app.services.books import BookService

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   async def get_books(db: AsyncSession = Depends(get_db)):
#
# You can write:
#   async def get_books(db: DbSession):

DbSession = Annotated[AsyncSession, Depends(get_db)]


# =============================================================================
# Services
# =============================================================================
def get_author_service(db: DbSession) -> AuthorService:
    """Build the author service on the request's session."""
    return AuthorService(AuthorRepository(db))


def get_book_service(db: DbSession) -> BookService:
    """
    Build the book service on the request's session.

    Both repositories share the session, so the author existence check
    and the book insert see the same connection.
    """
    return BookService(BookRepository(db), AuthorRepository(db))


AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]


# =============================================================================
# Path Identifiers
# =============================================================================
# Path ids are declared as plain strings and parsed here so that a
# malformed id is answered with 400 "Invalid uuid" rather than going
# through request validation.

INVALID_UUID_MESSAGE = "Invalid uuid"


def parse_uuid(value: str) -> UUID:
    """
    Parse the canonical string form of a UUID.

    Raises:
        HTTPException: 400 "Invalid uuid" if the value does not parse
    """
    try:
        return UUID(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_UUID_MESSAGE,
        )


def get_author_id(
    author_id: str = Path(..., description="Author ID", examples=["aeca0955-bae4-47e9-9f85-6818dc68ca51"]),
) -> UUID:
    return parse_uuid(author_id)


def get_book_id(
    book_id: str = Path(..., description="Book ID", examples=["5b1e3c8e-7f0e-4a57-8a5c-1d2f3a4b5c6d"]),
) -> UUID:
    return parse_uuid(book_id)


AuthorId = Annotated[UUID, Depends(get_author_id)]
BookId = Annotated[UUID, Depends(get_book_id)]


# =============================================================================
# API Key (documentation only)
# =============================================================================
# Declares the Authorization header as an API-key security scheme so it
# shows up in the OpenAPI document. auto_error=False and no check on the
# value: the secure route is a placeholder and enforces nothing.

api_key_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="API key. Documented for the secure test route, not verified.",
)

OptionalAPIKey = Annotated[str | None, Security(api_key_header)]
