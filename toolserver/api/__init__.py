"""API Layer — transports: FastAPI app routes, Lambda handler, stdio server and proxy.

Invariants:
    - Every transport delegates to the shared JSON-RPC dispatcher
    - Transports only frame bytes; no tool logic lives here

Design Decisions:
    - Thin transports over one dispatcher (ADR: impureim sandwich)
"""
