"""
Notekeeper Backend: Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract between clients and backend.
Why:   Automatic parsing, serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.

Design Decision:
    NoteWrite leaves `content` optional on purpose. A missing or empty
    content is a business rule violation reported by NoteService as a 400
    with a readable message, rather than FastAPI's generic 422.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """
    Body of POST /notes and PUT /notes/{id}.

    An empty title is treated the same as an absent one.
    """
    title: Optional[str] = Field(
        default=None,
        description="Optional title. Empty or null means derive a title from content on read.",
    )
    content: Optional[str] = Field(
        default=None,
        description="Note text. Required and must not be empty.",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Representation of a note returned by every notes endpoint.

    On read paths (GET /notes, GET /notes/{id}) `title` is the display
    title: the stored title, or the first TAKE_DEFAULT_N characters of
    content when none was stored. Write paths return the stored value,
    which may be null.
    """
    id: int = Field(description="Note identifier assigned by the store")
    title: Optional[str] = Field(default=None, description="Stored or display title")
    content: str = Field(description="Note text")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error / Operational Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
