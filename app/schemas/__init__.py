"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Request bodies carry their own constraints
3. Decoupling: Database schema can evolve independently of API
4. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxCreate / XxxUpdate: Request bodies
- XxxResponse: Fields returned in API responses
- XxxSuccessResponse: Envelope around a response payload
"""

from app.schemas.author import (
    AuthorCreate,
    AuthorResponse,
    AuthorSuccessResponse,
    to_author_response,
)
from app.schemas.book import (
    BookCreate,
    BookResponse,
    BooksSuccessResponse,
    BookSuccessResponse,
    BookUpdate,
    to_book_response,
    to_books_response,
)
from app.schemas.response import (
    ErrorResponse,
    SuccessResponse,
    ValidationErrorDetail,
    ValidationErrorResponse,
    error_response,
    validation_error_response,
)

__all__ = [
    # Author schemas
    "AuthorCreate",
    "AuthorResponse",
    "AuthorSuccessResponse",
    "to_author_response",
    # Book schemas
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookSuccessResponse",
    "BooksSuccessResponse",
    "to_book_response",
    "to_books_response",
    # Envelopes
    "SuccessResponse",
    "ErrorResponse",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
    "error_response",
    "validation_error_response",
]
