# Middleware package init
"""
Jotter Backend: Middleware Package
===================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the id.
"""
