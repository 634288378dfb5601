"""
Notefile Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and container probes.
How:   Loads the notes file under a shared lock, exactly as GET /notes does.
       If that works the service can answer requests end-to-end.

Status levels:
    - healthy:   notes file readable and parseable (HTTP 200)
    - unhealthy: notes file missing, unreadable or corrupt (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status

from notefile import __version__
from notefile.exceptions import StorageError
from notefile.schemas.note import HealthResponse
from notefile.store import NoteStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: NoteStore = Depends(get_store),
) -> HealthResponse:
    storage_status = "readable"
    note_count = None
    overall = "healthy"

    try:
        async with store.read_lock():
            note_count = len(await store.load_all())
    except StorageError as e:
        storage_status = "unreadable"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: notes file unusable: %s | %s", e.message, e.context)

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage_status,
        note_count=note_count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
