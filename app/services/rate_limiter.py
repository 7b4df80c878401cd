"""
Rate Limiting Service

Limits every client to RATE_LIMIT_DEFAULT requests (100/minute unless
configured otherwise), keyed on the client's real IP address.

The counters live in RATE_LIMIT_STORAGE_URI. The in-memory default is
per process; point it at Redis when running several workers.

Over the limit, the client gets:

    429 {"status": "error", "message": "Too many requests"}

with a Retry-After header.
"""

import logging

from fastapi import Request, status
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from app.config import get_settings
from app.schemas.response import error_response

logger = logging.getLogger(__name__)
settings = get_settings()

RATE_LIMIT_MESSAGE = "Too many requests"


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting.

    Handles common proxy headers to get the real client IP.
    Falls back to direct connection IP if no proxy headers.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address string
    """
    # X-Forwarded-For can contain multiple IPs; first is the client
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """
    Create and configure the rate limiter.

    default_limits applies to every route once SlowAPIMiddleware is
    installed, so no route needs a decorator.

    Returns:
        Configured Limiter instance
    """
    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Answer an over-limit request with 429 in the error envelope.

    Must stay synchronous: SlowAPIMiddleware calls the registered
    handler without awaiting it.
    """
    response = error_response(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMIT_MESSAGE)
    response.headers["Retry-After"] = "60"
    response.headers["X-RateLimit-Limit"] = str(exc.detail)

    logger.warning(f"Rate limit exceeded for {get_client_ip(request)}: {exc.detail}")

    return response
