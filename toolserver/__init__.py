"""Dev Tools Server — developer utilities and GitHub/GitLab tools over JSON-RPC (MCP).

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports (ADR: no convention-over-config)
"""
