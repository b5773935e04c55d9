# Middleware package init
"""
Howl Backend — Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error body share
    the same ID. Logging wraps everything below it, so its duration covers
    the handler and its database work.
"""
