"""
Response Envelope Schemas

Every JSON body the API writes is wrapped in the same envelope:

    {"status": "success" | "error", "message": "...", ...payload}

- SuccessResponse: status + message only (delete, secure route)
- ErrorResponse: any failure except validation
- ValidationErrorResponse: 400 with one entry per failed constraint

Entity-specific success envelopes (AuthorSuccessResponse, ...) live next
to their payload schemas and extend SuccessResponse.
"""

from typing import List

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Envelope for a successful operation."""

    status: str = Field(default="success", examples=["success"])
    message: str = Field(..., examples=["Operation completed successfully"])


class ErrorResponse(BaseModel):
    """Envelope for a failed operation."""

    status: str = Field(default="error", examples=["error"])
    message: str = Field(..., examples=["An error occurred"])


class ValidationErrorDetail(BaseModel):
    """One failed constraint on one request field."""

    field: str = Field(..., examples=["name"])
    message: str = Field(..., examples=["name is required"])


class ValidationErrorResponse(BaseModel):
    """Envelope for a request that failed structural validation."""

    status: str = Field(default="error", examples=["error"])
    message: str = Field(default="Validation failed", examples=["Validation failed"])
    errors: List[ValidationErrorDetail]


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a JSONResponse carrying the error envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def validation_error_response(errors: List[ValidationErrorDetail]) -> JSONResponse:
    """Build the 400 response listing every validation failure."""
    return JSONResponse(
        status_code=400,
        content=ValidationErrorResponse(errors=errors).model_dump(),
    )
