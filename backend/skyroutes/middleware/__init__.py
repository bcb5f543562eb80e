"""
SkyRoutes Backend - Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so every later log line can carry it
    - Logging measures the full handler time and sees the final status
"""
