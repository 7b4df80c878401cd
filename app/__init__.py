"""
Library API Application Package

A REST API over books and their authors, in three layers:
router -> service -> repository.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: Async SQLAlchemy engine and session management
- errors.py: Domain error taxonomy and its HTTP mapping
- main.py: FastAPI application factory and configuration
- middleware.py: Request deadline / disconnect cancellation
- dependencies.py: Dependency injection functions
- validation.py: Request validation error formatting
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- repositories/: Persistence, one repository per entity
- services/: Business rules, one service per entity
- routers/: API route handlers
- utils/: Helper functions (logging setup)
"""

__version__ = "0.1.0"
