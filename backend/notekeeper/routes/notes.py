"""
Notekeeper Backend: Notes Route Handlers
=========================================

What:  CRUD and search endpoints for the `notes` resource.
How:   Extracts path/query/body data, delegates to NoteService with the
       request's NoteStore, returns JSON with the right status code.
Who:   Called by API clients; documented in Swagger at /docs.

Route Inventory:
    POST   /notes           → 201 created note
    GET    /notes?query=    → 200 list of notes (display titles)
    GET    /notes/{id}      → 200 note (display title) | 404 | 422 (id out of range)
    PUT    /notes/{id}      → 200 updated note | 404 | 400
    DELETE /notes/{id}      → 200 deleted note | 404
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from notekeeper.schemas.note import ErrorResponse, NoteResponse, NoteWrite
from notekeeper.services.note_service import note_service
from notekeeper.store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/notes", tags=["Notes"])

_SERVER_ERROR = {"description": "Store failure", "model": ErrorResponse}
_NOT_FOUND = {"description": "No note with this id", "model": ErrorResponse}
_BAD_CONTENT = {"description": "Content missing or empty", "model": ErrorResponse}

# Upper bound of the 32-bit INTEGER id column; larger ids are rejected with 422
MAX_NOTE_ID = 2_147_483_647


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _BAD_CONTENT, 500: _SERVER_ERROR},
    summary="Create a note",
    description=(
        "Creates a note from `{title?, content}`. Content is required; an empty "
        "title is stored as null and a title is derived from content on read."
    ),
)
async def create_note(
    payload: Optional[NoteWrite] = None,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.create_note(store, payload)


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: _SERVER_ERROR},
    summary="List or search notes",
    description=(
        "Returns all notes, or only those whose title or content contains `query`. "
        "Notes without a title get the first TAKE_DEFAULT_N characters of content as title."
    ),
)
async def list_notes(
    response: Response,
    query: Optional[str] = Query(
        default=None,
        description="Optional substring filter applied to title and content",
    ),
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    """
    List notes, optionally filtered.

    Example:
        GET /notes?query=milk  → notes mentioning "milk" in title or content
    """
    notes = await note_service.list_notes(store, query=query)
    response.headers["X-Total-Count"] = str(len(notes))
    return notes


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a note by id",
)
async def get_note(
    note_id: int = Path(ge=1, le=MAX_NOTE_ID, description="Note identifier"),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.get_note(store, note_id)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: _BAD_CONTENT, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Replace a note",
    description="Replaces both title and content. Unknown ids return 404 before the body is checked.",
)
async def update_note(
    note_id: int = Path(ge=1, le=MAX_NOTE_ID, description="Note identifier"),
    payload: Optional[NoteWrite] = None,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.update_note(store, note_id, payload)


@router.delete(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a note",
    description="Removes the note and returns its last stored values.",
)
async def delete_note(
    note_id: int = Path(ge=1, le=MAX_NOTE_ID, description="Note identifier"),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.delete_note(store, note_id)
