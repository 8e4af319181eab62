# Services package init
"""
RapidShyp Relay — Services Layer
==================================

Service Inventory:
    - coercion:               presence checks and prefix number parsing
    - RapidShypClient:        outbound POST to RapidShyp, returns an UpstreamResult
    - ServiceabilityService:  validate → build payload → call → translate
"""
