"""Class Hierarchy Index — store-backed hierarchy queries.

Invariants:
    - The class arena is re-read from the store at the start of every query
      (the store is the single source of truth; nothing is cached across calls)
    - Queries that take a class id raise CardKindMismatchError if it is not a Class card
    - Unknown ids raise ReferenceNotFoundError (from the store)

Design Decisions:
    - Thin shell over core/class_hierarchy: load snapshot, call pure function
"""

from speki.core import class_hierarchy
from speki.core.card_types import Card, ClassCard, InstanceCard
from speki.core.domain_types import CardId, CardKind
from speki.core.errors import CardKindMismatchError
from speki.core.repository_protocols import CardStore


class ClassHierarchyIndex:
    """Ancestor chains, descendant sets and subclass membership over a CardStore."""

    def __init__(self, store: CardStore):
        self._store = store

    def require_class(self, class_id: CardId) -> Card:
        return _require_kind(self._store.load(class_id), CardKind.CLASS)

    def require_instance(self, instance_id: CardId) -> Card:
        return _require_kind(self._store.load(instance_id), CardKind.INSTANCE)

    def class_ids(self) -> list[CardId]:
        return [card.id for card in self._store.all_classes()]

    def instance_ids(self) -> list[CardId]:
        return [
            card.id for card in self._store.all_cards()
            if isinstance(card.card_type, InstanceCard)
        ]

    def ancestor_chain(self, class_id: CardId) -> list[CardId]:
        self.require_class(class_id)
        return class_hierarchy.ancestor_chain(class_id, self._arena())

    def descendant_classes(self, class_id: CardId) -> list[CardId]:
        self.require_class(class_id)
        children = class_hierarchy.build_children_index(self._arena())
        return class_hierarchy.descendant_classes(class_id, children)

    def subclass_cards(self, class_id: CardId) -> list[CardId]:
        self.require_class(class_id)
        return class_hierarchy.subclass_cards(
            class_id, self._arena(), self._store.all_cards(),
        )

    def _arena(self) -> dict[CardId, ClassCard]:
        return class_hierarchy.index_classes(self._store.all_classes())


def _require_kind(card: Card, expected: CardKind) -> Card:
    if card.kind is not expected:
        raise CardKindMismatchError(str(card.id), expected.value, card.kind.value)
    return card
