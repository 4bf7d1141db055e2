"""
Notekeeper Backend: Store Package
==================================

What:  Persistence layer between the services and the database session.
How:   `get_note_store` is a FastAPI dependency; each request gets a NoteStore
       bound to its own session from `get_db_session`.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.database import get_db_session
from notekeeper.store.note_store import NoteStore

__all__ = ["NoteStore", "get_note_store"]


async def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    """Provide a NoteStore over the request's database session."""
    return NoteStore(db)
