"""Core Layer — pure domain logic, no network, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic (get_time lives in services)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
