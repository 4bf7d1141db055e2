"""
Notekeeper Backend: Note Service (Business Logic)
==================================================

What:  Validation, display-title derivation, and not-found handling for notes.
Why:   Keeps business rules independent of HTTP concerns and of SQL.
How:   Each method receives the request's NoteStore, calls it once or twice,
       and converts entities into NoteResponse models.
Who:   Called by the route handlers in notekeeper.routes.notes.

Display Title Rule:
    A note stored without a title is shown with the first N characters of
    its content, N being TAKE_DEFAULT_N. Content shorter than N is shown
    whole. The derived title only exists in responses of read paths
    (list, search, get); it is never written back.

Design Decision:
    NoteService is stateless apart from the configured title length. The
    store is passed in per call, so tests can hand it an AsyncMock and
    concurrent requests never share a session.
"""

import logging
from typing import List, Optional, Tuple

from notekeeper.config import settings
from notekeeper.exceptions import NotFoundError, ValidationError
from notekeeper.models.note import Note
from notekeeper.schemas.note import NoteResponse, NoteWrite
from notekeeper.store.note_store import NoteStore

logger = logging.getLogger(__name__)


def display_title(title: Optional[str], content: str, length: int) -> str:
    """
    Title shown to clients for a note.

    >>> display_title(None, "Hello world", 5)
    'Hello'
    >>> display_title(None, "Bye", 5)
    'Bye'
    >>> display_title("Groceries", "milk, eggs", 5)
    'Groceries'
    """
    if title is not None:
        return title
    return content[:length]


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note(): Validate and insert
        - list_notes(): All notes, or those matching a search query
        - get_note(): Single note with display title
        - update_note(): Existence check, validation, wholesale replace
        - delete_note(): Existence check and removal
    """

    def __init__(self, title_length: Optional[int] = None):
        self._title_length = title_length

    @property
    def title_length(self) -> int:
        """Fallback title length; read from settings unless fixed at construction."""
        if self._title_length is not None:
            return self._title_length
        return settings.take_default_n

    async def create_note(self, store: NoteStore, payload: Optional[NoteWrite]) -> NoteResponse:
        """
        Create a note from a request body.

        Returns:
            The stored note. Its title is the stored value, so it is null when
            the client omitted it.

        Raises:
            ValidationError: Content is missing or empty (→ 400)
            PersistenceError: The store could not write the note (→ 500)
        """
        content, title = self._validated_fields(payload)
        note = await store.insert(content=content, title=title)
        logger.info("Note %s created (title %s)", note.id, "set" if title else "derived")
        return NoteResponse.model_validate(note)

    async def list_notes(self, store: NoteStore, query: Optional[str] = None) -> List[NoteResponse]:
        """
        List every note, or only those whose content or title contains `query`.

        An empty query behaves like no query. Each note carries its display title.
        """
        if query:
            notes = await store.search(query)
            logger.debug("Search %r matched %d notes", query, len(notes))
        else:
            notes = await store.list_all()
        return [self._to_display(note) for note in notes]

    async def get_note(self, store: NoteStore, note_id: int) -> NoteResponse:
        """
        Retrieve a single note with its display title.

        Raises:
            NotFoundError: No note has this id (→ 404)
        """
        note = await store.find_by_id(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return self._to_display(note)

    async def update_note(
        self, store: NoteStore, note_id: int, payload: Optional[NoteWrite]
    ) -> NoteResponse:
        """
        Replace title and content of an existing note.

        Existence is checked before the body is validated, so an unknown id
        is always a 404 whatever the payload.

        Raises:
            NotFoundError: No note has this id (→ 404)
            ValidationError: Content is missing or empty (→ 400)
        """
        if await store.find_by_id(note_id) is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        content, title = self._validated_fields(payload)
        note = await store.update(note_id, content=content, title=title)
        if note is None:
            # Deleted by a concurrent request between the two store calls
            raise NotFoundError(resource="note", resource_id=str(note_id))

        logger.info("Note %s updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, store: NoteStore, note_id: int) -> NoteResponse:
        """
        Delete a note and return its last stored values.

        Raises:
            NotFoundError: No note has this id (→ 404)
        """
        note = await store.delete(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        logger.info("Note %s deleted", note_id)
        return NoteResponse.model_validate(note)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _validated_fields(payload: Optional[NoteWrite]) -> Tuple[str, Optional[str]]:
        """Return (content, title) with an empty title normalized to None."""
        if payload is None or not payload.content:
            raise ValidationError(message="Content must be provided", field="content")
        return payload.content, payload.title or None

    def _to_display(self, note: Note) -> NoteResponse:
        return NoteResponse(
            id=note.id,
            title=display_title(note.title, note.content, self.title_length),
            content=note.content,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
