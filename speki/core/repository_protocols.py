"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All storage accessed through CardStore; all user input through Prompter
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: the store is local and fast, every operation runs to completion
    - Prompter returns None when the user declines — the caller turns that into a cancellation
"""

from collections.abc import Sequence
from typing import Protocol

from speki.core.card_types import Attribute, Card, CardType
from speki.core.domain_types import AttributeId, CardId, Category, PromptSlot


class CardStore(Protocol):
    """Contract for card/attribute/dependency persistence — implemented by shell.

    load/load_attribute raise ReferenceNotFoundError for unknown ids;
    writes raise StoreError when refused.
    """
    def load(self, card_id: CardId) -> Card: ...
    def exists(self, card_id: CardId) -> bool: ...
    def all_cards(self) -> Sequence[Card]: ...
    def all_classes(self) -> Sequence[Card]: ...
    def mutate_type(self, card_id: CardId, new_type: CardType) -> None: ...
    def create_card(self, card_type: CardType, category: Category) -> CardId: ...

    def create_attribute(
        self, pattern: str, class_id: CardId, back_type: CardId | None,
    ) -> AttributeId: ...
    def load_attribute(self, attribute_id: AttributeId) -> Attribute: ...
    def attributes_of_class(self, class_id: CardId) -> Sequence[Attribute]: ...

    def add_dependency(self, dependency: CardId, dependent: CardId) -> None: ...
    def dependencies_of(self, card_id: CardId) -> Sequence[CardId]: ...
    def cached_dependents_of(self, card_id: CardId) -> Sequence[CardId]: ...


class Prompter(Protocol):
    """Injected "ask the user" capability.

    Candidates are computed by pure queries before asking; the prompter only
    picks. A returned value is re-checked against the candidates by the caller.
    """
    def choose_card(
        self, slot: PromptSlot, prompt: str, candidates: Sequence[CardId],
    ) -> CardId | None: ...

    def choose_attribute(
        self, slot: PromptSlot, prompt: str, candidates: Sequence[Attribute],
    ) -> AttributeId | None: ...

    def ask_text(self, slot: PromptSlot, prompt: str) -> str | None: ...
