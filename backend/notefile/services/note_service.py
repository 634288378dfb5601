"""
Notefile Backend — Note Service (Handler Template)
===================================================

What:  The business rules behind every /notes route.
How:   Each operation follows the same template:

           validate → acquire lock → load → operate → (save) → release → return

       Validation that needs no file access (id parsing, non-empty fields
       on create) happens before the lock is taken. Reads take the store's
       shared lock; create/update/delete take the exclusive lock for the
       whole load → mutate → save cycle, so concurrent writers are
       serialized and each one sees the complete state left by the last.
Who:   Called by route handlers; calls NoteStore.

Design Decision:
    NoteService is stateless. The NoteStore is passed in on every call so
    tests can point the service at an isolated temp file.

Update asymmetry:
    create rejects an empty title or description. update overwrites both
    fields unconditionally, empty strings included.
"""

import logging
import re
from typing import List

from notefile.exceptions import NotFoundError, ValidationError
from notefile.models.note import Note
from notefile.schemas.note import NotePayload
from notefile.store import NoteStore

logger = logging.getLogger(__name__)

# Optional sign and ASCII digits only: no whitespace, underscores or decimals
_NOTE_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_NOTE_ID_MIN = -(2**63)
_NOTE_ID_MAX = 2**63 - 1


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        ValidationError and NotFoundError are raised directly. StorageError
        subclasses from the store propagate unchanged; the global handler
        turns them into a generic 500. Every lock is released by its
        `async with` block on the way out, whatever the exit path.
    """

    @staticmethod
    def parse_note_id(raw: str) -> int:
        """
        Convert a path segment to a note id.

        Every `{id}` route uses this, so a non-integer id is a 400 on
        get, update and delete alike. Ids are 64-bit signed integers;
        a value outside that range is a 400 as well.
        """
        if not _NOTE_ID_PATTERN.fullmatch(raw):
            raise ValidationError(
                message=f"Note id '{raw}' is not an integer",
                field="id",
            )
        value = int(raw)
        if not _NOTE_ID_MIN <= value <= _NOTE_ID_MAX:
            raise ValidationError(
                message=f"Note id '{raw}' is out of range",
                field="id",
            )
        return value

    async def list_notes(self, store: NoteStore) -> List[Note]:
        """Return the whole collection in insertion order."""
        async with store.read_lock():
            notes = await store.load_all()
        logger.debug("Listed %d notes", len(notes))
        return notes

    async def get_note(self, store: NoteStore, note_id: int) -> Note:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: No note with this id (→ 404)
        """
        async with store.read_lock():
            notes = await store.load_all()

        index = store.find_by_id(notes, note_id)
        if index is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return notes[index]

    async def create_note(self, store: NoteStore, payload: NotePayload) -> int:
        """
        Append a new note and return its id.

        Raises:
            ValidationError: Empty title or description (→ 400)
        """
        if payload.title == "":
            raise ValidationError(message="Title must not be empty", field="title")
        if payload.description == "":
            raise ValidationError(message="Description must not be empty", field="description")

        async with store.write_lock():
            notes = await store.load_all()
            note = Note(
                id=store.next_id(notes),
                title=payload.title,
                description=payload.description,
            )
            notes.append(note)
            await store.save_all(notes)

        logger.info("Note %d created", note.id)
        return note.id

    async def update_note(self, store: NoteStore, note_id: int, payload: NotePayload) -> int:
        """
        Overwrite title and description of an existing note.

        The id never changes. A missing note raises before anything is
        written, so the file is untouched on 404.

        Raises:
            NotFoundError: No note with this id (→ 404)
        """
        async with store.write_lock():
            notes = await store.load_all()
            index = store.find_by_id(notes, note_id)
            if index is None:
                raise NotFoundError(resource="note", resource_id=str(note_id))

            notes[index] = notes[index].model_copy(
                update={"title": payload.title, "description": payload.description}
            )
            await store.save_all(notes)

        logger.info("Note %d updated", note_id)
        return note_id

    async def delete_note(self, store: NoteStore, note_id: int) -> int:
        """
        Remove exactly one note, preserving the order of the rest.

        Raises:
            NotFoundError: No note with this id (→ 404); file untouched.
        """
        async with store.write_lock():
            notes = await store.load_all()
            index = store.find_by_id(notes, note_id)
            if index is None:
                raise NotFoundError(resource="note", resource_id=str(note_id))

            await store.save_all(store.delete_at(notes, index))

        logger.info("Note %d deleted", note_id)
        return note_id


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
