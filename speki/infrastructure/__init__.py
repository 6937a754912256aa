"""Infrastructure Layer — store adapter, prompter adapter and logging setup.

Invariants:
    - Adapters implement the Protocols in core/repository_protocols.py
    - Store failures surface as core.errors types, never raw exceptions

Design Decisions:
    - Adapters over direct dict access in services: services depend on Protocols only
"""
