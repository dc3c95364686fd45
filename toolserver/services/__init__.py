"""Services Layer — tool definitions, handlers, tool dispatch and JSON-RPC dispatch.

Invariants:
    - Handlers split by category (basic, utility, github, gitlab)
    - Tool dispatch uses explicit dict mapping (no auto-discovery)

Design Decisions:
    - One handler file per category for locality (ADR: no god objects)
"""
