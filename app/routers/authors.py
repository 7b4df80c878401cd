"""
Authors Router

Endpoints for authors: create, and read by id.

Domain errors raised by the service (NotFoundError, DuplicateError, ...)
are not caught here; the exception handlers registered in main.py turn
them into the error envelope.
"""

from fastapi import APIRouter, status

from app.dependencies import AuthorId, AuthorServiceDep
from app.schemas import (
    AuthorCreate,
    AuthorSuccessResponse,
    ErrorResponse,
    ValidationErrorResponse,
    to_author_response,
)

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


@router.post(
    "",
    response_model=AuthorSuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    description="Create a new author with the provided data.",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid body or validation failed"},
        409: {"model": ErrorResponse, "description": "Author with this name already exists"},
    },
)
async def create_author(
    author_data: AuthorCreate,
    service: AuthorServiceDep,
) -> AuthorSuccessResponse:
    """Create a new author."""
    author = await service.create_author(author_data)
    return AuthorSuccessResponse(
        message="Author created successfully",
        author=to_author_response(author),
    )


@router.get(
    "/{author_id}",
    response_model=AuthorSuccessResponse,
    summary="Get author by id",
    description="Get a single author by its ID.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid uuid"},
        404: {"model": ErrorResponse, "description": "Author not found"},
    },
)
async def get_author(
    author_id: AuthorId,
    service: AuthorServiceDep,
) -> AuthorSuccessResponse:
    """Get a single author by ID."""
    author = await service.get_author_by_id(author_id)
    return AuthorSuccessResponse(
        message="Author retrieved successfully",
        author=to_author_response(author),
    )
