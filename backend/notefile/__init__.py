"""
Notefile Backend — Application Package Initializer
===================================================

What: Marks the `notefile` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is two thin layers over a single JSON file:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (handler template)     │  ← validate → lock → load → op → save
    ├─────────────────────────────────────┤
    │      Models & Schemas (Data)        │  ← Pydantic
    ├─────────────────────────────────────┤
    │     NoteStore (JSON file + RWLock)  │  ← whole-file read / overwrite
    └─────────────────────────────────────┘

    Every request re-reads the whole file; every mutation rewrites it.
    A single AsyncRWLock owned by the store serializes access.
"""

__version__ = "1.0.0"
