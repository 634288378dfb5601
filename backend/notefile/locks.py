"""
Notefile Backend — Async Reader/Writer Lock
============================================

What:  A shared/exclusive lock for coroutines running on one event loop.
How:   A single asyncio.Condition guards three counters (active readers,
       active writer flag, waiting writers). Holders enter through the
       `reader()` and `writer()` async context managers.
Who:   Owned by NoteStore; one instance guards the whole notes file.

Semantics:
    reader()  Many holders at once. Blocks while a writer is active OR
              waiting, so a steady stream of reads cannot starve a write.
    writer()  One holder. Blocks while any reader or writer is active.

    Both context managers release in `finally`, so an exception, early
    return or task cancellation inside the critical section always frees
    the lock. The release runs in a shielded anyio CancelScope: Starlette
    delivers cancellation again on every await inside a cancelled scope,
    and waiting for the condition during release must not be interrupted.

    There is no timeout and no deadlock detection: a holder that never
    returns keeps every other request queued.

Scope:
    In-process only. A second OS process touching the same file is not
    coordinated by this lock.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

import anyio


class AsyncRWLock:
    """Writer-preferring reader/writer lock for asyncio tasks."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """Number of tasks currently holding the lock in shared mode."""
        return self._readers

    @property
    def writer_active(self) -> bool:
        """True while a task holds the lock in exclusive mode."""
        return self._writer

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[None]:
        """Hold the lock in shared mode for the body of the `async with`."""
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            with anyio.CancelScope(shield=True):
                async with self._cond:
                    self._readers -= 1
                    if self._readers == 0:
                        self._cond.notify_all()

    @asynccontextmanager
    async def writer(self) -> AsyncIterator[None]:
        """Hold the lock in exclusive mode for the body of the `async with`."""
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            finally:
                self._writers_waiting -= 1
                # Readers parked behind a cancelled writer must re-check.
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            with anyio.CancelScope(shield=True):
                async with self._cond:
                    self._writer = False
                    self._cond.notify_all()
