"""
Notekeeper Backend: Note Store (Persistence)
=============================================

What:  CRUD over Note rows by integer key, plus a full scan and a substring filter.
Why:   Keeps every SQL statement in one place so the service deals in notes,
       not sessions and queries.
How:   Wraps one AsyncSession (one per request). Every write commits before
       returning, so a failed commit surfaces here as PersistenceError and
       no response is built for a write that was never saved.
Who:   Built per request by notekeeper.store.get_note_store; used by NoteService.

Error Handling:
    Any SQLAlchemyError is logged with context and re-raised as
    PersistenceError. Missing records are not errors at this layer: lookups
    return None and the service decides what that means.
"""

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import PersistenceError
from notekeeper.models.note import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """Persistence operations for Note records bound to a single session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, content: str, title: Optional[str] = None) -> Note:
        """
        Persist a new note and return it with its assigned id.

        Raises:
            PersistenceError: The insert could not be written.
        """
        note = Note(content=content, title=title)
        try:
            self.session.add(note)
            await self.session.flush()  # Assigns id
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to insert note: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not save the note. Please try again later.",
                context={"operation": "insert", "error_type": type(e).__name__},
            ) from e
        return note

    async def find_by_id(self, note_id: int) -> Optional[Note]:
        """Return the note with the given id, or None."""
        try:
            result = await self.session.execute(select(Note).where(Note.id == note_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Failed to fetch note %s: %s", note_id, str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve the note. Please try again later.",
                context={"operation": "find_by_id", "note_id": note_id},
            ) from e

    async def list_all(self) -> List[Note]:
        """Return every note, ordered by id."""
        return await self._fetch(select(Note).order_by(Note.id), operation="list_all")

    async def search(self, query: str) -> List[Note]:
        """
        Return notes whose content or title contains `query`.

        Case-sensitive substring match through LIKE. PostgreSQL's LIKE is
        case-sensitive already; SQLite connections get
        `PRAGMA case_sensitive_like` (see database.enable_case_sensitive_like).
        `%` and `_` in the query are escaped and match literally. Notes with
        a NULL title can only match on content.
        """
        statement = (
            select(Note)
            .where(
                or_(
                    Note.content.contains(query, autoescape=True),
                    Note.title.contains(query, autoescape=True),
                )
            )
            .order_by(Note.id)
        )
        return await self._fetch(statement, operation="search")

    async def update(
        self, note_id: int, content: str, title: Optional[str] = None
    ) -> Optional[Note]:
        """
        Replace both content and title of an existing note.

        Returns None, leaving the table untouched, when the id is unknown.
        """
        note = await self.find_by_id(note_id)
        if note is None:
            return None

        note.content = content
        note.title = title
        try:
            await self.session.flush()
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to update note %s: %s", note_id, str(e), exc_info=True)
            raise PersistenceError(
                message="Could not update the note. Please try again later.",
                context={"operation": "update", "note_id": note_id},
            ) from e
        return note

    async def delete(self, note_id: int) -> Optional[Note]:
        """Remove a note and return its last values, or None when the id is unknown."""
        note = await self.find_by_id(note_id)
        if note is None:
            return None

        try:
            await self.session.delete(note)
            await self.session.flush()
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to delete note %s: %s", note_id, str(e), exc_info=True)
            raise PersistenceError(
                message="Could not delete the note. Please try again later.",
                context={"operation": "delete", "note_id": note_id},
            ) from e
        return note

    async def _fetch(self, statement, operation: str) -> List[Note]:
        try:
            result = await self.session.execute(statement)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve notes. Please try again later.",
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e
