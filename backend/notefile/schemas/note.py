"""
Notefile Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate OpenAPI documentation.

Design Decision:
    The request body is a separate model from the persisted Note: clients
    never choose the id, so NotePayload has no id field and an `id` key in
    the body is ignored like any other unknown key.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class NotePayload(BaseModel):
    """
    What:  Body of POST /notes and PATCH /notes/{id}.

    Both fields default to "" when absent or null. Create rejects empty
    values; update writes them through unchanged.
    """

    model_config = ConfigDict(strict=True)

    title: str = Field(default="", description="Note title")
    description: str = Field(default="", description="Note body text")

    @field_validator("title", "description", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class MutationResponse(BaseModel):
    """
    What:  Acknowledgement returned by create, update and delete.

    Example:
        {
          "message": "Note created successfully.",
          "id": 3
        }
    """

    message: str = Field(description="Human-readable outcome")
    id: int = Field(description="Id of the note that was created, updated or deleted")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response.

    `storage` is "readable" when the notes file loads and parses under a
    read lock, "unreadable" otherwise.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="Notes file status: readable, unreadable")
    note_count: Optional[int] = Field(default=None, description="Notes currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")
