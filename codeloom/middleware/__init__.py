# Middleware package init
"""
Codeloom Backend - Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Metrics] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Metrics first: counts every request, including ones that fail further in
    2. Request ID: correlation id for logs, error bodies and the response header
    3. Logging: one access line per request, tagged with the request id
    4. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
