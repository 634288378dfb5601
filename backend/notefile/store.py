"""
Notefile Backend — File-Backed Note Store
==========================================

What:  Owns the notes file and the lock that serializes access to it.
How:   The whole JSON array is read on every load and the whole array is
       re-encoded and written back on every save. There is no index, no
       append path, and no cache between requests.
Who:   Constructed once by create_app() and kept on `app.state.store`;
       route handlers receive it through the `get_store` dependency.

Persistence discipline:
    1. Encode the full collection in memory first.
    2. Overwrite the file with one write call.
    A failure in step 1 never touches the file. A failure in step 2 is
    reported as StorageWriteError; durability beyond the single write is
    whatever the filesystem provides.

Concurrency discipline:
    Callers take `read_lock()` for load-only work and `write_lock()` around
    the full load → mutate → save cycle. The store does not lock inside
    load_all/save_all itself, so a writer can load and save under one
    exclusive hold.

Id assignment:
    next_id() returns max(id) + 1, or 1 for an empty collection. It does not
    depend on the last element holding the largest id. Deleting the note
    with the highest id frees that id for the next create.
"""

import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional, Union

import aiofiles
from fastapi import Request
from pydantic import ValidationError as SchemaError

from notefile.exceptions import (
    StorageParseError,
    StorageReadError,
    StorageSerializeError,
    StorageWriteError,
)
from notefile.locks import AsyncRWLock
from notefile.models.note import Note, NoteCollection

logger = logging.getLogger(__name__)


class NoteStore:
    """
    JSON-array file plus the single reader/writer lock guarding it.

    Attributes:
        path: Location of the notes file (must already exist).
        lock: The AsyncRWLock shared by every handler using this store.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.lock = AsyncRWLock()

    # ── Locking ───────────────────────────────────────────────────────────

    @asynccontextmanager
    async def read_lock(self) -> AsyncIterator[None]:
        """Shared mode: any number of concurrent readers."""
        async with self.lock.reader():
            yield

    @asynccontextmanager
    async def write_lock(self) -> AsyncIterator[None]:
        """Exclusive mode: held across a full load → mutate → save cycle."""
        async with self.lock.writer():
            yield

    # ── File I/O ──────────────────────────────────────────────────────────

    def exists(self) -> bool:
        return self.path.is_file()

    async def load_all(self) -> List[Note]:
        """
        Read and validate the whole notes file.

        Raises:
            StorageReadError: The file is missing or unreadable.
            StorageParseError: The content is not a JSON array of notes.
        """
        try:
            async with aiofiles.open(self.path, mode="r", encoding="utf-8") as f:
                raw = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(
                context={"path": str(self.path), "error": str(e)}
            ) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageParseError(
                context={"path": str(self.path), "error": str(e)}
            ) from e

        try:
            return NoteCollection.validate_python(data)
        except SchemaError as e:
            raise StorageParseError(
                context={"path": str(self.path), "error_count": e.error_count()}
            ) from e

    async def save_all(self, notes: List[Note]) -> None:
        """
        Replace the file content with the indented JSON encoding of `notes`.

        Raises:
            StorageSerializeError: The collection could not be encoded.
            StorageWriteError: The file could not be written.
        """
        try:
            payload = json.dumps(
                [note.model_dump() for note in notes],
                indent=2,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise StorageSerializeError(context={"error": str(e)}) from e

        try:
            async with aiofiles.open(self.path, mode="w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            raise StorageWriteError(
                context={"path": str(self.path), "error": str(e)}
            ) from e

        logger.debug("Wrote %d notes to %s", len(notes), self.path)

    # ── In-memory collection helpers ──────────────────────────────────────

    @staticmethod
    def find_by_id(notes: List[Note], note_id: int) -> Optional[int]:
        """Position of the first note with `note_id`, or None. Linear scan."""
        for index, note in enumerate(notes):
            if note.id == note_id:
                return index
        return None

    @staticmethod
    def next_id(notes: List[Note]) -> int:
        """Id for a new note: one past the largest id present, 1 if empty."""
        if not notes:
            return 1
        return max(note.id for note in notes) + 1

    @staticmethod
    def delete_at(notes: List[Note], index: int) -> List[Note]:
        """Copy of `notes` without the element at `index`; order preserved."""
        return notes[:index] + notes[index + 1:]


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> NoteStore:
    """
    FastAPI dependency returning the application's NoteStore.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(store: NoteStore = Depends(get_store)):
            ...
    """
    return request.app.state.store
