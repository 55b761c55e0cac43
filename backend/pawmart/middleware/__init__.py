# Middleware package init
"""
PawMart Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log method, path, status and duration with that ID
    3. GZip / CORS: Starlette built-ins configured in main.py

Authentication is NOT middleware: only some routes are protected, so the
authorization gate runs as a route dependency (see pawmart.auth).
"""
