# Routes package init
"""
RapidShyp Relay — API Routes Package
======================================

Route Inventory:
    - serviceability.py: POST /api/rapidshyp/check  (relay a serviceability check)
    - health.py:         GET  /health               (liveness check)

Routes stay thin: they pull the body out of the request, call the service,
and let the global exception handlers format failures.
"""
