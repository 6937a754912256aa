"""API Dependencies — per-process store injected into routes.

Invariants:
    - One InMemoryCardStore per process, created lazily on first request
    - Routes obtain the store only through get_store (tests override it)

Design Decisions:
    - FastAPI Depends over module imports in routes: app.dependency_overrides
      swaps the store without patching
"""

from speki.infrastructure.memory_store import InMemoryCardStore

_store: InMemoryCardStore | None = None


def get_store() -> InMemoryCardStore:
    global _store
    if _store is None:
        _store = InMemoryCardStore()
    return _store

