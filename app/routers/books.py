"""
Books Router

CRUD endpoints for books, plus a placeholder "secure" route.

Route order matters: /books/secure is declared before /books/{book_id},
otherwise "secure" would be captured as a book id and rejected as an
invalid uuid.
"""

from fastapi import APIRouter, status

from app.dependencies import BookId, BookServiceDep, OptionalAPIKey
from app.schemas import (
    BookCreate,
    BooksSuccessResponse,
    BookSuccessResponse,
    BookUpdate,
    ErrorResponse,
    SuccessResponse,
    ValidationErrorResponse,
    to_book_response,
    to_books_response,
)

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


# =============================================================================
# CRUD Endpoints
# =============================================================================

@router.post(
    "",
    response_model=BookSuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a new book for an existing author.",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid body, validation failed or invalid author ID"},
        404: {"model": ErrorResponse, "description": "Author not found"},
        409: {"model": ErrorResponse, "description": "Book with this name already exists"},
    },
)
async def create_book(
    book_data: BookCreate,
    service: BookServiceDep,
) -> BookSuccessResponse:
    """
    Create a new book.

    The author must exist at the time of the call; the author_id must be
    a well-formed UUID.
    """
    book = await service.create_book(book_data)
    return BookSuccessResponse(
        message="Book created successfully",
        book=to_book_response(book),
    )


@router.get(
    "",
    response_model=BooksSuccessResponse,
    summary="Get all books",
    description="Get a list of all books. An empty catalogue answers 404.",
    responses={
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
async def list_books(service: BookServiceDep) -> BooksSuccessResponse:
    """List all books."""
    books = await service.get_all_books()
    return BooksSuccessResponse(
        message="Books retrieved successfully",
        books=to_books_response(books),
    )


@router.get(
    "/secure",
    response_model=SuccessResponse,
    summary="Authenticated test route",
    description=(
        "Placeholder for an authenticated route. The Authorization header is "
        "documented but not checked."
    ),
)
async def secure_test_route(api_key: OptionalAPIKey) -> SuccessResponse:
    """Answer ok regardless of the supplied key."""
    return SuccessResponse(message="ok")


@router.get(
    "/{book_id}",
    response_model=BookSuccessResponse,
    summary="Get book by id",
    description="Get a single book by its ID.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid uuid"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
async def get_book(
    book_id: BookId,
    service: BookServiceDep,
) -> BookSuccessResponse:
    """Get a single book by ID."""
    book = await service.get_book_by_id(book_id)
    return BookSuccessResponse(
        message="Book retrieved successfully",
        book=to_book_response(book),
    )


@router.put(
    "/{book_id}",
    response_model=BookSuccessResponse,
    summary="Update a book",
    description="Replace the description of an existing book.",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid uuid, invalid body or validation failed"},
        404: {"model": ErrorResponse, "description": "Book not found"},
        409: {"model": ErrorResponse, "description": "Book with this name already exists"},
    },
)
async def update_book(
    book_id: BookId,
    book_data: BookUpdate,
    service: BookServiceDep,
) -> BookSuccessResponse:
    """Update an existing book."""
    book = await service.update_book(book_data, book_id)
    return BookSuccessResponse(
        message="Book updated successfully",
        book=to_book_response(book),
    )


@router.delete(
    "/{book_id}",
    response_model=SuccessResponse,
    summary="Delete a book",
    description="Delete a book by its ID.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid uuid"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
async def delete_book(
    book_id: BookId,
    service: BookServiceDep,
) -> SuccessResponse:
    """Delete a book."""
    await service.delete_book(book_id)
    return SuccessResponse(message="Book deleted successfully")
