# Middleware package init
"""
MenuBoard — Middleware Package
================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: generate the correlation ID first
    2. Logging: log request details with that ID
    3. GZip / CORS: applied by FastAPI's built-in middleware
"""
