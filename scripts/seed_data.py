#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and books for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py            # clear, then seed
    python scripts/seed_data.py --keep     # seed on top of existing rows

This script:
1. Connects to the database using app settings
2. Creates the tables if they don't exist
3. Clears existing data (unless --keep)
4. Creates authors and books through the services, so the same rules
   apply as for API calls (author must exist, titles are unique)
"""

import argparse
import asyncio
import sys
from pathlib import Path
from uuid import UUID

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import SessionLocal, create_tables, dispose_engine
from app.errors import DuplicateError
from app.models import Author, Book
from app.repositories import AuthorRepository, BookRepository
from app.schemas import AuthorCreate, BookCreate
from app.services import AuthorService, BookService

AUTHORS = [
    "George Orwell",
    "Jane Austen",
    "Ernest Hemingway",
    "Agatha Christie",
    "Isaac Asimov",
    "J.R.R. Tolkien",
]

BOOKS = [
    ("1984", "A dystopian novel set in a totalitarian society under constant surveillance.", "George Orwell"),
    ("Animal Farm", "An allegorical novella reflecting events leading up to the Russian Revolution.", "George Orwell"),
    ("Pride and Prejudice", "A romantic novel following the emotional development of Elizabeth Bennet.", "Jane Austen"),
    ("The Old Man and the Sea", "The story of an aging Cuban fisherman and his epic battle with a giant marlin.", "Ernest Hemingway"),
    ("Murder on the Orient Express", "Hercule Poirot investigates a murder on a train stuck in a snowdrift.", "Agatha Christie"),
    ("Foundation", "The first novel in the Foundation series about the fall of the Galactic Empire.", "Isaac Asimov"),
    ("The Hobbit", "Bilbo Baggins embarks on a quest to reclaim the Lonely Mountain.", "J.R.R. Tolkien"),
    ("I, Robot", "A collection of nine science fiction short stories about robots.", "Isaac Asimov"),
]


async def clear_data(db: AsyncSession) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    await db.execute(delete(Book))
    await db.execute(delete(Author))
    await db.commit()
    print("Data cleared.")


async def create_authors(service: AuthorService, db: AsyncSession) -> dict[str, UUID]:
    """
    Create sample authors and return their ids by name.

    Names that already exist are looked up instead, so their books are
    still seeded when running with --keep.
    """
    print("Creating authors...")
    authors = {}
    created = 0
    for name in AUTHORS:
        try:
            author = await service.create_author(AuthorCreate(name=name))
            created += 1
        except DuplicateError:
            result = await db.execute(select(Author).where(Author.name == name))
            author = result.scalar_one()
            print(f"  - using existing author {name!r}")
        authors[name] = author.id

    print(f"Created {created} authors.")
    return authors


async def create_books(service: BookService, authors: dict[str, UUID]) -> list[Book]:
    """Create sample books for the authors returned by create_authors."""
    print("Creating books...")
    books = []
    for title, description, author_name in BOOKS:
        author_id = authors.get(author_name)
        if author_id is None:
            continue
        request = BookCreate(title=title, description=description, author_id=str(author_id))
        try:
            books.append(await service.create_book(request))
        except DuplicateError:
            print(f"  - skipped existing book {title!r}")

    print(f"Created {len(books)} books.")
    return books


async def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    await create_tables()

    try:
        async with SessionLocal() as db:
            if clear_existing:
                await clear_data(db)

            author_repository = AuthorRepository(db)
            authors = await create_authors(AuthorService(author_repository), db)
            books = await create_books(
                BookService(BookRepository(db), author_repository),
                authors,
            )

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the library database with sample data.")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing rows instead of clearing the tables first",
    )
    args = parser.parse_args()
    asyncio.run(seed_database(clear_existing=not args.keep))


if __name__ == "__main__":
    main()
