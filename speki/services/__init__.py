"""Services Layer — store-backed queries, dependency editing, transition handlers and dispatch.

Invariants:
    - Handlers split by concern (retype, classes, attributes), max 5 methods each
    - Transition dispatch uses explicit dict mapping (no auto-discovery)
    - Pure checks from core/ run before any store write

Design Decisions:
    - One handler file per concern for locality (ADR: no god objects)
"""
