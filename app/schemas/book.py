"""
Book Pydantic Schemas

Request bodies:
- BookCreate: POST /books
- BookUpdate: PUT /books/{book_id}

Responses:
- BookResponse: id, title and the resolved author. The description is
  accepted on input but deliberately not part of the output projection.
- BookSuccessResponse / BooksSuccessResponse: envelopes
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models import Book
from app.schemas.author import AuthorResponse
from app.schemas.response import SuccessResponse


class BookCreate(BaseModel):
    """
    Schema for creating a new book.

    author_id is kept as a plain string here: whether it is a well-formed
    UUID is a business rule checked by BookService, which answers
    "invalid author ID" rather than a generic validation failure.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Book title, unique across all books",
        examples=["1984"],
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Book description or summary",
        examples=["A dystopian novel set in a totalitarian society."],
    )
    author_id: str = Field(
        ...,
        min_length=1,
        description="Id of an existing author",
        examples=["aeca0955-bae4-47e9-9f85-6818dc68ca51"],
    )


class BookUpdate(BaseModel):
    """Schema for updating an existing book."""

    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(
        ...,
        min_length=1,
        description="New description",
        examples=["Updated summary."],
    )


class BookResponse(BaseModel):
    """
    Schema for book responses.

    author is None (serialized as null) when the book has no author.
    """

    id: UUID = Field(..., description="Unique identifier")
    title: str = Field(..., examples=["1984"])
    author: AuthorResponse | None = Field(
        default=None,
        description="Resolved author, null when the book has none",
    )

    model_config = ConfigDict(from_attributes=True)


class BookSuccessResponse(SuccessResponse):
    """Envelope returned by single-book endpoints."""

    book: BookResponse


class BooksSuccessResponse(SuccessResponse):
    """Envelope returned by GET /books."""

    books: List[BookResponse]


def to_book_response(book: Book) -> BookResponse:
    """Project a Book entity (with its author loaded) onto BookResponse."""
    return BookResponse.model_validate(book)


def to_books_response(books: List[Book]) -> List[BookResponse]:
    """Project a list of Book entities, preserving order."""
    return [to_book_response(book) for book in books]
