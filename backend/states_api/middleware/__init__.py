# Middleware package init
"""
States API Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so every later log line can carry the ID.
    - The access log measures the full handler duration, including the
      database round trips for fun facts.
"""
