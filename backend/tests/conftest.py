"""
Notefile Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── notes_file: temp file containing `[]`
    ├── seeded_notes_file: temp file with three notes (ids 1, 2, 5)
    ├── store / seeded_store: NoteStore bound to the files above
    └── test_client / seeded_client: HTTPX AsyncClient against create_app(store=...)

Every test gets its own file, so nothing touches ./notes.json.
"""

import json
import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Set before any notefile import builds the module-level settings
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["NOTES_FILE"] = os.path.join(os.path.dirname(__file__), "unused-notes.json")

from notefile.store import NoteStore  # noqa: E402


SEED_NOTES = [
    {"id": 1, "title": "Groceries", "description": "Milk, eggs"},
    {"id": 2, "title": "Call mum", "description": "Sunday afternoon"},
    {"id": 5, "title": "Ideas", "description": "Write a JSON-backed notes API"},
]


@pytest.fixture
def notes_file(tmp_path):
    """An empty note collection on disk."""
    path = tmp_path / "notes.json"
    path.write_text("[]", encoding="utf-8")
    return path


@pytest.fixture
def seeded_notes_file(tmp_path):
    """
    A collection of three notes. Ids are not contiguous and the file is
    written with the same 2-space indent the store uses.
    """
    path = tmp_path / "notes.json"
    path.write_text(json.dumps(SEED_NOTES, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def store(notes_file):
    return NoteStore(notes_file)


@pytest.fixture
def seeded_store(seeded_notes_file):
    return NoteStore(seeded_notes_file)


def _client_for(note_store: NoteStore) -> AsyncClient:
    from notefile.main import create_app

    app = create_app(store=note_store)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to an app bound to the empty `store`.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    async with _client_for(store) as client:
        yield client


@pytest_asyncio.fixture
async def seeded_client(seeded_store):
    """HTTPX AsyncClient talking to an app bound to `seeded_store`."""
    async with _client_for(seeded_store) as client:
        yield client
