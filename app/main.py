"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: verify the database answers
   - shutdown: close pooled connections

3. Middleware Stack
   - CORS: Allow cross-origin requests
   - Strip slashes: "/api/books/" is served as "/api/books"
   - Request deadline: cancel requests that overrun REQUEST_TIMEOUT
     or whose client went away
   - Rate limit: RATE_LIMIT_DEFAULT requests per client IP (slowapi)

4. Exception Handlers
   - Every failure leaves as {"status": "error", "message": ...}
   - Domain errors are mapped through app.errors.ERROR_RESPONSES
   - Unexpected errors are logged in full and answered with a generic 500
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import get_settings
from app.database import SessionLocal, dispose_engine, ping_database
from app.dependencies import DbSession
from app.errors import INTERNAL_ERROR_RESPONSE, DomainError, resolve_error_response
from app.middleware import RequestDeadlineMiddleware, StripSlashesMiddleware
from app.routers import authors_router, books_router
from app.schemas import error_response, validation_error_response
from app.services.rate_limiter import limiter, rate_limit_exceeded_handler
from app.utils.logging import configure_logging
from app.validation import INVALID_BODY_MESSAGE, format_errors, is_body_error

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}")

    async with SessionLocal() as session:
        if await ping_database(session):
            logger.info("Database connection established")
        else:
            logger.warning("Database unavailable at startup - requests will fail until it recovers")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    await dispose_engine()
    logger.info("Server and database shutdown cleanly")


# =============================================================================
# Exception Handlers
# =============================================================================
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Answer request validation failures with 400.

    An undecodable body gets the short "Invalid request body" message;
    field-level failures get one {field, message} entry each.
    """
    errors = exc.errors()
    if is_body_error(errors):
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_BODY_MESSAGE)
    return validation_error_response(format_errors(errors))


async def domain_exception_handler(
    request: Request,
    exc: DomainError,
) -> JSONResponse:
    """
    Map a domain error to its status code and client message.

    Anything that maps to 500 is logged with the chained cause; the
    client only ever sees "Internal server error".
    """
    status_code, message = resolve_error_response(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"unexpected error: {exc!r}", exc_info=exc)
    return error_response(status_code, message)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Render framework and dependency HTTP errors in the same envelope."""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError,
) -> JSONResponse:
    """
    Handle database errors that escaped the repositories.

    Logs the actual error while hiding details from users.
    """
    logger.error(f"Database error: {exc}", exc_info=exc)
    return error_response(*INTERNAL_ERROR_RESPONSE)


async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Catch-all exception handler."""
    logger.error(f"Unhandled error: {exc}", exc_info=exc)
    return error_response(*INTERNAL_ERROR_RESPONSE)


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    # OpenAPI documentation is only served in development
    docs_enabled = settings.is_development

    app = FastAPI(
        title=settings.app_name,
        description="""
## Library API

A RESTful API for managing books and their authors.

### Features
- **Authors**: Create and look up authors
- **Books**: Create, list, read, update and delete books

### Responses
Every response is wrapped in `{"status", "message", ...}`.
        """,
        version=settings.api_version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
        # StripSlashesMiddleware serves trailing-slash paths directly
        redirect_slashes=False,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # Attach the limiter to the app state; SlowAPIMiddleware applies its
    # default limit to every route and calls the 429 handler registered here.
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------
    # Added innermost first. From the outside in:
    #   CORS -> strip slashes -> request deadline -> rate limit -> app
    # CORS is outermost so that 429 and 504 responses still carry its
    # headers; slashes are stripped before the limiter resolves the route.
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestDeadlineMiddleware, timeout=settings.request_timeout)
    app.add_middleware(StripSlashesMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
        max_age=12 * 3600,
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DomainError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(authors_router, prefix=settings.api_prefix)
    app.include_router(books_router, prefix=settings.api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the database answers.",
    )
    async def health_check(db: DbSession) -> JSONResponse:
        """
        Health check endpoint.

        Used by load balancers and container orchestrators. Answers 503
        when the database does not respond.
        """
        database_ok = await ping_database(db)
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "app": settings.app_name,
                "version": __version__,
                "database": "ok" if database_ok else "unavailable",
            },
        )

    @app.api_route(
        f"{settings.api_prefix}/alive",
        methods=["GET", "HEAD"],
        response_class=PlainTextResponse,
        tags=["Health"],
        summary="Liveness check",
        description="Answers \".\" while the process is up. Does not touch the database.",
    )
    async def alive() -> str:
        return "."

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "api": settings.api_prefix,
            "docs": "/docs" if docs_enabled else None,
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m app.main
# In production, use: uvicorn app.main:app --host 0.0.0.0 --port 8000

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
