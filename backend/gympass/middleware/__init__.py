# Middleware package init
"""
GymPass Backend — Middleware Package
=====================================

Middleware Chain (request direction):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: rejects abusive clients before any work
    2. Request ID: correlation id for logs and error bodies
    3. Logging: records status and duration with that id
"""
