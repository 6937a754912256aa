"""Dependency Graph Editor — adds and queries dependency edges through the store.

Invariants:
    - add_edge(dependency, dependent): the dependent requires the dependency
    - Adding an existing edge has no further effect (idempotent upsert)
    - Cycles and self-edges are accepted, never rejected
    - dependents_of reads the store's cached reverse index; dependencies_of the forward list
    - Unknown ids raise ReferenceNotFoundError before anything is written

Design Decisions:
    - No cycle detection: circular prerequisites are a legitimate user outcome
    - New-card helpers create the card in the anchor card's category before linking
"""

import logging

from speki.core.card_types import Card, draft_card
from speki.core.dependency_graph import instance_dependencies
from speki.core.domain_types import CardId
from speki.core.repository_protocols import CardStore
from speki.services.card_type_model import CardView

logger = logging.getLogger(__name__)


class DependencyGraphEditor:
    """Dependency/dependent edges between cards."""

    def __init__(self, store: CardStore):
        self._store = store

    def add_edge(self, dependency: CardId, dependent: CardId) -> bool:
        """Link two existing cards. Returns False when the edge already existed."""
        self._store.load(dependency)
        self._store.load(dependent)
        if dependency in self._store.dependencies_of(dependent):
            logger.debug(
                "Dependency already present",
                extra={"card_id": str(dependent)},
            )
            return False
        self._store.add_dependency(dependency, dependent)
        logger.info(
            f"Added dependency {dependency}",
            extra={"card_id": str(dependent)},
        )
        return True

    def dependencies_of(self, card_id: CardId) -> list[CardId]:
        self._store.load(card_id)
        return list(self._store.dependencies_of(card_id))

    def dependents_of(self, card_id: CardId) -> list[CardId]:
        self._store.load(card_id)
        return list(self._store.cached_dependents_of(card_id))

    def instance_dependencies(self, card_id: CardId) -> list[Card]:
        """Dependencies of card_id that are Instance cards."""
        deps = [self._store.load(dep) for dep in self.dependencies_of(card_id)]
        return instance_dependencies(deps)

    def add_new_dependency(self, card_id: CardId, front: str, back: str) -> CardId | None:
        """Create a card the given card depends on. None if front is blank (cancelled)."""
        new_id = self._create_beside(card_id, front, back)
        if new_id is not None:
            self.add_edge(new_id, card_id)
        return new_id

    def add_new_dependent(self, card_id: CardId, front: str, back: str) -> CardId | None:
        """Create a card that depends on the given card. None if front is blank (cancelled)."""
        new_id = self._create_beside(card_id, front, back)
        if new_id is not None:
            self.add_edge(card_id, new_id)
        return new_id

    def overview(self, card_id: CardId) -> dict:
        """Dependencies and dependents of a card, with rendered fronts."""
        view = CardView(self._store)

        def entries(ids: list[CardId]) -> list[dict]:
            return [{"id": str(i), "front": view.front_of(i)} for i in ids]

        return {
            "card_id": str(card_id),
            "dependencies": entries(self.dependencies_of(card_id)),
            "dependents": entries(self.dependents_of(card_id)),
        }

    def _create_beside(self, card_id: CardId, front: str, back: str) -> CardId | None:
        anchor = self._store.load(card_id)
        card_type = draft_card(front, back)
        if card_type is None:
            return None
        return self._store.create_card(card_type, anchor.category)
