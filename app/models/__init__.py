"""
SQLAlchemy Models Package

This package contains all database models for the Library API.

Model Relationships:
- Author <-> Book: One-to-Many (an author can write many books,
                   a book has at most one author)

Import all models here to:
1. Make them available as: from app.models import Book, Author
2. Ensure Alembic discovers them for migrations
"""

from app.models.author import Author
from app.models.book import Book

__all__ = [
    "Author",
    "Book",
]
