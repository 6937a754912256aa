"""Card Type Model (shell) — in-place retyping and rendered card text.

Invariants:
    - into_type replaces the payload through the store; id and category untouched
    - into_type performs no invariant validation: callers validate at the moment of intent
    - Attribute fronts render through their pattern; a cycle of attribute cards
      referencing each other renders the repeated card by its id instead of recursing

Design Decisions:
    - CardView resolves references through the store and delegates formatting
      to core/card_view (pure)
"""

from speki.core.card_types import AttributeCard, Card, CardType, back_of
from speki.core.card_view import back_text, front_text, render_question, type_name
from speki.core.domain_types import CardId
from speki.core.repository_protocols import CardStore


def into_type(store: CardStore, card_id: CardId, new_type: CardType) -> Card:
    """Replace a card's variant. Store errors (unknown id, refused write) propagate."""
    store.mutate_type(card_id, new_type)
    return store.load(card_id)


class CardView:
    """Rendered front/back text for cards held in a store."""

    def __init__(self, store: CardStore):
        self._store = store

    def front(self, card: Card) -> str:
        return self._front(card, frozenset())

    def front_of(self, card_id: CardId) -> str:
        return self.front(self._store.load(card_id))

    def back(self, card: Card) -> str:
        return back_text(back_of(card.card_type), self.front_of)

    def describe(self, card: Card) -> dict:
        return {
            "id": str(card.id),
            "kind": card.kind.value,
            "type_name": type_name(card.card_type),
            "category": card.category,
            "front": self.front(card),
            "back": self.back(card),
        }

    def _front(self, card: Card, rendering: frozenset[CardId]) -> str:
        if card.id in rendering:
            return str(card.id)
        rendering = rendering | {card.id}

        def question(attribute_card: AttributeCard) -> str:
            attribute = self._store.load_attribute(attribute_card.attribute)
            instance = self._store.load(attribute_card.instance)
            return render_question(attribute.pattern, self._front(instance, rendering))

        return front_text(card.card_type, question)
