"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Separate from persistence (repositories)
- Easier to test in isolation

Current services:
- authors.py: AuthorService (create, get by id)
- books.py: BookService (author existence check, empty-list policy,
  read-before-delete)
"""

from app.services.authors import AuthorService
from app.services.books import BookService

__all__ = [
    "AuthorService",
    "BookService",
]
