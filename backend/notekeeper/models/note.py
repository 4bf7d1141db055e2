"""
Notekeeper Backend: Note SQLAlchemy Model
==========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteStore for CRUD operations and by Alembic for schema management.

Table Design:
    - id: Integer primary key assigned by the database
    - title: Nullable. NULL means "show a title derived from content"
    - content: Required. Emptiness is rejected by NoteService, not the schema
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


class Note(Base):
    """
    A single user note.

    Lifecycle:
        1. Created by POST /notes
        2. Replaced wholesale (title and content) by PUT /notes/{id}
        3. Removed by DELETE /notes/{id}; there is no soft delete
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # The derived display title is computed on read and never stored here
    title: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, title={self.title!r})>"
