"""In-Memory Card Store — arena implementation of the CardStore protocol.

Invariants:
    - Cards and attributes live in dicts keyed by id (arena); nothing holds live references
    - load/load_attribute raise ReferenceNotFoundError for unknown ids
    - mutate_type replaces the payload only; id and category are preserved
    - add_dependency is an idempotent upsert and keeps the dependents cache in step

Design Decisions:
    - In-memory dicts, not DB: durable storage is an external collaborator;
      this store backs the HTTP shell and the tests
    - Dependents cache re-derived from the forward lists on every edge write,
      so reads never walk the whole graph
"""

import logging
import uuid
from collections.abc import Sequence
from typing import get_args

from speki.core.card_types import Attribute, Card, CardType, ClassCard
from speki.core.dependency_graph import derive_dependents_index
from speki.core.domain_types import AttributeId, CardId, Category
from speki.core.errors import ReferenceNotFoundError, StoreError

logger = logging.getLogger(__name__)

_CARD_TYPES = get_args(CardType)


class InMemoryCardStore:
    """Dict-backed card, attribute and dependency storage."""

    def __init__(self) -> None:
        self._cards: dict[CardId, Card] = {}
        self._attributes: dict[AttributeId, Attribute] = {}
        self._dependencies: dict[CardId, list[CardId]] = {}
        self._dependents: dict[CardId, list[CardId]] = {}

    # --- Cards ----------------------------------------------------------------

    def load(self, card_id: CardId) -> Card:
        card = self._cards.get(card_id)
        if card is None:
            raise ReferenceNotFoundError("Card", str(card_id))
        return card

    def exists(self, card_id: CardId) -> bool:
        return card_id in self._cards

    def all_cards(self) -> Sequence[Card]:
        return list(self._cards.values())

    def all_classes(self) -> Sequence[Card]:
        return [c for c in self._cards.values() if isinstance(c.card_type, ClassCard)]

    def mutate_type(self, card_id: CardId, new_type: CardType) -> None:
        _require_card_type(new_type, "mutate_type")
        card = self.load(card_id)
        self._cards[card_id] = card.with_type(new_type)
        logger.debug(
            f"Retyped card to {type(new_type).__name__}",
            extra={"card_id": str(card_id)},
        )

    def create_card(self, card_type: CardType, category: Category) -> CardId:
        _require_card_type(card_type, "create_card")
        card_id = CardId(uuid.uuid4())
        self._cards[card_id] = Card(id=card_id, card_type=card_type, category=category)
        logger.debug("Created card", extra={"card_id": str(card_id)})
        return card_id

    # --- Attributes -----------------------------------------------------------

    def create_attribute(
        self, pattern: str, class_id: CardId, back_type: CardId | None,
    ) -> AttributeId:
        self.load(class_id)
        if back_type is not None:
            self.load(back_type)
        attribute_id = AttributeId(uuid.uuid4())
        self._attributes[attribute_id] = Attribute(
            id=attribute_id, pattern=pattern, class_id=class_id, back_type=back_type,
        )
        logger.debug(
            "Created attribute pattern",
            extra={"attribute_id": str(attribute_id), "class_id": str(class_id)},
        )
        return attribute_id

    def load_attribute(self, attribute_id: AttributeId) -> Attribute:
        attribute = self._attributes.get(attribute_id)
        if attribute is None:
            raise ReferenceNotFoundError("Attribute", str(attribute_id))
        return attribute

    def attributes_of_class(self, class_id: CardId) -> Sequence[Attribute]:
        return [a for a in self._attributes.values() if a.class_id == class_id]

    # --- Dependencies ---------------------------------------------------------

    def add_dependency(self, dependency: CardId, dependent: CardId) -> None:
        self.load(dependency)
        self.load(dependent)
        deps = self._dependencies.setdefault(dependent, [])
        if dependency in deps:
            return
        deps.append(dependency)
        self._dependents = derive_dependents_index(self._dependencies)

    def dependencies_of(self, card_id: CardId) -> Sequence[CardId]:
        return list(self._dependencies.get(card_id, ()))

    def cached_dependents_of(self, card_id: CardId) -> Sequence[CardId]:
        return list(self._dependents.get(card_id, ()))


def _require_card_type(card_type: object, operation: str) -> None:
    if not isinstance(card_type, _CARD_TYPES):
        raise StoreError(f"unsupported payload {type(card_type).__name__}", operation)
