# Routes package init
"""
Notefile Backend — API Routes Package
======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   GET    /notes, GET /notes/{id}, POST /notes,
                  PATCH  /notes/{id}, DELETE /notes/{id}
    - health.py:  GET    /health

Design Principle:
    Routes are THIN: parse the path, call the service, build the response.
    Locking, file access and business rules live in NoteService / NoteStore.
"""
