# Middleware package init
"""
RapidShyp Relay — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Unhandled Error] → Route Handler

    1. Request ID: assign or accept the correlation ID first
    2. Logging: access log line tagged with that ID
    3. GZip / CORS: applied by Starlette's stock middleware
    4. Unhandled Error: innermost, so its 500 still gets an ID and a log line
"""
