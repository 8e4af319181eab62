"""
RapidShyp Relay — Application Package Initializer
===================================================

What:  A small FastAPI backend that checks pincode serviceability by relaying
       requests to the RapidShyp shipping API.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Relay + Client)       │  ← validation, payload, upstream call
    ├─────────────────────────────────────┤
    │         Schemas (Contracts)         │  ← Pydantic request/response models
    └─────────────────────────────────────┘

    There is no persistence layer: every request is validated, forwarded
    once, and answered.
"""

__version__ = "1.0.0"
