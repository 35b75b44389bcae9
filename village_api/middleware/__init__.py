"""
Village Backend — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so every later log line can carry the ID
    - Logging captures response status and duration on the way out
"""
