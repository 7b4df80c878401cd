"""
Request Validation Formatting

Request bodies are declared as Pydantic models; FastAPI validates them
and raises RequestValidationError with every failed constraint. This
module turns that error into the API's own 400 responses:

- a body that is not valid JSON, missing, not a JSON object, or that
  carries a value of the wrong JSON type (e.g. {"name": 123})
  -> {"status": "error", "message": "Invalid request body"}
- field constraint failures
  -> {"status": "error", "message": "Validation failed",
      "errors": [{"field": ..., "message": ...}, ...]}

Fields are reported by their display name (name -> Name, author_id ->
AuthorID), and messages come from a fixed table keyed by the Pydantic
error type, with a generic fallback for types the table does not know.
"""

from typing import Any, Callable, Dict, List, Sequence

from app.schemas.response import ValidationErrorDetail

INVALID_BODY_MESSAGE = "Invalid request body"

# Error types that mean the body could not be decoded into the request model
BODY_ERROR_TYPES = {
    "json_invalid",
    "json_type",
    "model_type",
    "model_attributes_type",
    "dict_type",
    "string_type",
}


def _too_short(field: str, ctx: Dict[str, Any]) -> str:
    min_length = ctx.get("min_length", 1)
    if min_length <= 1:
        return f"{field} is required"
    return f"{field} must be at least {min_length} characters"


MESSAGE_TEMPLATES: Dict[str, Callable[[str, Dict[str, Any]], str]] = {
    "missing": lambda field, ctx: f"{field} is required",
    "string_too_short": _too_short,
    "string_too_long": lambda field, ctx: (
        f"{field} must be at most {ctx.get('max_length')} characters"
    ),
    "uuid_parsing": lambda field, ctx: f"{field} must be a valid UUID",
    "uuid_type": lambda field, ctx: f"{field} must be a valid UUID",
    "int_parsing": lambda field, ctx: f"{field} must be a number",
    "int_type": lambda field, ctx: f"{field} must be a number",
    "greater_than": lambda field, ctx: f"{field} must be greater than {ctx.get('gt')}",
    "greater_than_equal": lambda field, ctx: (
        f"{field} must be greater than or equal to {ctx.get('ge')}"
    ),
    "less_than": lambda field, ctx: f"{field} must be less than {ctx.get('lt')}",
    "less_than_equal": lambda field, ctx: (
        f"{field} must be less than or equal to {ctx.get('le')}"
    ),
}


def display_name(key: Any) -> str:
    """
    Turn a JSON key into its display name: "title" -> "Title",
    "author_id" -> "AuthorID". List indexes are kept as they are.
    """
    if isinstance(key, int):
        return str(key)
    words = str(key).split("_")
    return "".join(
        word.upper() if word.lower() == "id" else word[:1].upper() + word[1:]
        for word in words
    )


def field_name(loc: Sequence[Any]) -> str:
    """
    Turn a Pydantic error location into a client-facing field name.

    The leading source marker ("body", "query", ...) is dropped:
    ("body", "name") -> "Name", ("body", "author", "id") -> "Author.ID".
    """
    parts = loc[1:] or loc
    return ".".join(display_name(part) for part in parts)


def error_message(error_type: str, field: str, ctx: Dict[str, Any] | None = None) -> str:
    """Render the message for one failed constraint."""
    template = MESSAGE_TEMPLATES.get(error_type)
    if template is None:
        return f"{field} is invalid"
    return template(field, ctx or {})


def is_body_error(errors: Sequence[Dict[str, Any]]) -> bool:
    """
    Tell whether the body itself was unusable.

    True for malformed JSON, an empty body, or a JSON value that is not
    an object: errors located at ("body",) or ("body", <offset>) rather
    than at a named field.
    """
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if not loc or loc[0] != "body":
            continue
        if error.get("type") in BODY_ERROR_TYPES or len(loc) == 1:
            return True
    return False


def format_errors(errors: Sequence[Dict[str, Any]]) -> List[ValidationErrorDetail]:
    """
    Build one ValidationErrorDetail per failed constraint, in order.

    Args:
        errors: RequestValidationError.errors()

    Returns:
        The detail list for the validation envelope
    """
    details = []
    for error in errors:
        field = field_name(error.get("loc", ()))
        details.append(
            ValidationErrorDetail(
                field=field,
                message=error_message(error.get("type", ""), field, error.get("ctx")),
            )
        )
    return details
