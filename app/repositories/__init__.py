"""
Repositories Package

One repository per entity. Repositories own every SQLAlchemy call and
translate database failures into app.errors domain errors.

- authors.py: AuthorRepository (create, get_by_id)
- books.py: BookRepository (create, get_all, get_by_id, update, delete)
"""

from app.repositories.authors import AuthorRepository
from app.repositories.books import BookRepository

__all__ = [
    "AuthorRepository",
    "BookRepository",
]
