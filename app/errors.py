"""
Domain Errors

Repositories and services raise these; routers never see driver exceptions.

Every error carries two tags:
- kind: what went wrong (ErrorKind)
- entity: which resource it concerns ("author" or "book")

The app-level exception handler in main.py looks the (entity, kind) pair up
in ERROR_RESPONSES to pick the HTTP status and client-facing message.
Anything not in the table is answered as a 500 "Internal server error"
and logged with its full detail.
"""

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    """The recognized failure conditions."""

    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    INVALID_AUTHOR_ID = "invalid_author_id"
    INTERNAL = "internal"


class DomainError(Exception):
    """Base class for all domain exceptions."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, entity: str, detail: str | None = None) -> None:
        self.entity = entity
        self.detail = detail or f"{entity} {self.kind.value.replace('_', ' ')}"
        super().__init__(self.detail)


class NotFoundError(DomainError):
    """Raised when a requested row does not exist."""

    kind = ErrorKind.NOT_FOUND


class DuplicateError(DomainError):
    """Raised when a write hits a uniqueness constraint."""

    kind = ErrorKind.DUPLICATE


class InvalidAuthorIdError(DomainError):
    """Raised when a book request references an author by a malformed id."""

    kind = ErrorKind.INVALID_AUTHOR_ID

    def __init__(self, detail: str | None = None) -> None:
        super().__init__("book", detail or "invalid author ID")


class InternalError(DomainError):
    """Opaque store or runtime failure. The cause is chained, never shown."""

    kind = ErrorKind.INTERNAL


# (entity, kind) -> (status code, client message)
ERROR_RESPONSES: dict[tuple[str, ErrorKind], tuple[int, str]] = {
    ("author", ErrorKind.NOT_FOUND): (
        status.HTTP_404_NOT_FOUND,
        "Author not found",
    ),
    ("author", ErrorKind.DUPLICATE): (
        status.HTTP_409_CONFLICT,
        "Author with this name already exists",
    ),
    ("book", ErrorKind.NOT_FOUND): (
        status.HTTP_404_NOT_FOUND,
        "Book not found",
    ),
    ("book", ErrorKind.DUPLICATE): (
        status.HTTP_409_CONFLICT,
        "Book with this name already exists",
    ),
    ("book", ErrorKind.INVALID_AUTHOR_ID): (
        status.HTTP_400_BAD_REQUEST,
        "invalid author ID",
    ),
}

INTERNAL_ERROR_RESPONSE = (
    status.HTTP_500_INTERNAL_SERVER_ERROR,
    "Internal server error",
)


def resolve_error_response(exc: DomainError) -> tuple[int, str]:
    """
    Map a domain error to its HTTP status and client message.

    Unknown pairs (including every INTERNAL error) fall back to 500.
    """
    return ERROR_RESPONSES.get((exc.entity, exc.kind), INTERNAL_ERROR_RESPONSE)
