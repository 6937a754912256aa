"""Core Layer — pure domain logic, no IO, no DB, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or schemas/
    - Functions operate on in-memory snapshots (cards, classes, attributes) handed in by the shell

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
