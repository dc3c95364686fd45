"""Pydantic Schemas — JSON-RPC envelope and params validation.

Invariants:
    - Schemas validate at system boundary (transport input)

Design Decisions:
    - Envelope shape lives here, method semantics in services/jsonrpc_dispatch.py
"""
