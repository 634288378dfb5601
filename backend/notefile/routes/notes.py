"""
Notefile Backend — Notes Route Handlers
========================================

What:  CRUD endpoints over the note collection.
How:   Parse the path id, delegate to NoteService, shape the response.
       Status codes for failures come from the global exception handlers.

Routes:
    GET    /notes          200 array of notes
    GET    /notes/{id}     200 single note
    POST   /notes          201 {message, id}
    PATCH  /notes/{id}     200 {message, id}
    DELETE /notes/{id}     200 {message, id}

The `{id}` segment is declared as a plain string and converted by
NoteService.parse_note_id, so every route answers a non-integer id with
the same 400 body.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from notefile.models.note import Note
from notefile.schemas.note import ErrorResponse, MutationResponse, NotePayload
from notefile.services.note_service import note_service
from notefile.store import NoteStore, get_store

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(tags=["Notes"])

_ERRORS_400 = {400: {"description": "Malformed id or body", "model": ErrorResponse}}
_ERRORS_404 = {404: {"description": "Note not found", "model": ErrorResponse}}
_ERRORS_500 = {500: {"description": "Notes file unreadable or unwritable", "model": ErrorResponse}}


@router.get(
    "/notes",
    response_model=List[Note],
    responses={**_ERRORS_500},
    summary="List every note",
)
async def list_notes(store: NoteStore = Depends(get_store)) -> List[Note]:
    """Return the full collection in insertion order. No pagination."""
    return await note_service.list_notes(store)


@router.get(
    "/notes/{note_id}",
    response_model=Note,
    responses={**_ERRORS_400, **_ERRORS_404, **_ERRORS_500},
    summary="Get a single note by id",
)
async def get_note(note_id: str, store: NoteStore = Depends(get_store)) -> Note:
    return await note_service.get_note(store, note_service.parse_note_id(note_id))


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse,
    responses={**_ERRORS_400, **_ERRORS_500},
    summary="Create a note",
)
async def create_note(
    payload: NotePayload,
    store: NoteStore = Depends(get_store),
) -> MutationResponse:
    """
    Create a note with a store-assigned id.

    Title and description must both be non-empty. Any `id` in the body
    is ignored.
    """
    new_id = await note_service.create_note(store, payload)
    return MutationResponse(message="Note created successfully.", id=new_id)


@router.patch(
    "/notes/{note_id}",
    response_model=MutationResponse,
    responses={**_ERRORS_400, **_ERRORS_404, **_ERRORS_500},
    summary="Replace a note's title and description",
)
async def update_note(
    note_id: str,
    payload: NotePayload,
    store: NoteStore = Depends(get_store),
) -> MutationResponse:
    """
    Overwrite title and description. Empty values are written as given;
    fields missing from the body count as empty.
    """
    updated_id = await note_service.update_note(
        store, note_service.parse_note_id(note_id), payload
    )
    return MutationResponse(message="Note updated successfully.", id=updated_id)


@router.delete(
    "/notes/{note_id}",
    response_model=MutationResponse,
    responses={**_ERRORS_400, **_ERRORS_404, **_ERRORS_500},
    summary="Delete a note",
)
async def delete_note(note_id: str, store: NoteStore = Depends(get_store)) -> MutationResponse:
    deleted_id = await note_service.delete_note(store, note_service.parse_note_id(note_id))
    return MutationResponse(message="Note deleted successfully.", id=deleted_id)
