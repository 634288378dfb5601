# Middleware package init
"""
Notefile Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: assign the correlation ID first so every later log line
       (including the access log) can carry it.
    2. Logging: one access-log line per request with status and duration.

    Responses unwind in reverse, so the X-Request-ID header is set last.
"""
