"""
Book Model

The central model of the Library API.

A book optionally belongs to one author through a nullable foreign key.
The author is resolved by the repository with a LEFT OUTER JOIN, so a
book without author_id simply comes back with author = None.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.author import Author


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required, unique)
    - description: Book summary (required)
    - author_id: Optional reference to authors.id

    Relationships:
    - author: Many-to-One (None when author_id is NULL)

    Example:
        book = Book(
            title="1984",
            description="A dystopian novel...",
            author_id=author.id,
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Book title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book description or summary"
    )

    # ondelete="SET NULL" orphans books instead of cascading the delete.
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("authors.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
        comment="Author of the book, if any"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped[Optional["Author"]] = relationship(
        "Author",
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author_id={self.author_id})"
