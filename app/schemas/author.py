"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

- AuthorCreate: request body for POST /authors
- AuthorResponse: public projection of an Author (id and name only)
- AuthorSuccessResponse: envelope wrapping one AuthorResponse
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models import Author
from app.schemas.response import SuccessResponse


class AuthorCreate(BaseModel):
    """
    Schema for creating a new author.

    str_strip_whitespace runs before the length check, so a name made
    only of spaces fails min_length=1 exactly like an empty one.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author's full name, unique across all authors",
        examples=["George Orwell", "Jane Austen"],
    )


class AuthorResponse(BaseModel):
    """
    Schema for author responses (what the API returns).

    from_attributes=True allows building it straight from an Author
    model instance with AuthorResponse.model_validate(author).
    """

    id: UUID = Field(
        ...,
        description="Unique identifier",
        examples=["aeca0955-bae4-47e9-9f85-6818dc68ca51"],
    )
    name: str = Field(..., examples=["George Orwell"])

    model_config = ConfigDict(from_attributes=True)


class AuthorSuccessResponse(SuccessResponse):
    """Envelope returned by the author endpoints."""

    author: AuthorResponse


def to_author_response(author: Author) -> AuthorResponse:
    """Project an Author entity onto its response schema."""
    return AuthorResponse.model_validate(author)
