"""Class Handlers — set_parent_class, change_class, new_class, set_back_reference.

Invariants:
    - set_parent_class only on Class cards; choosing the card itself is a silent no-op
    - Parent cycles through other classes are accepted (hierarchy queries are cycle-safe)
    - new_class: empty name is a cancellation; the class is created in the card's category
    - set_back_reference on an Attribute card must satisfy the pattern's back_type;
      a back_type retyped away from Class is a NOT_A_CLASS notice
"""

import logging
from dataclasses import replace

from speki.core.card_types import (
    AttributeCard, Card, CardBack, ClassCard, InstanceCard, TextBack, with_back,
)
from speki.core.domain_types import CardId, PromptSlot, TransitionKind
from speki.core.enforce_transitions import (
    check_candidates_exist, check_class_card, check_legal_source,
)
from speki.core.repository_protocols import CardStore, Prompter
from speki.core.transition_outcomes import cancelled, ok, rejected
from speki.services.attribute_engine import AttributeResolutionEngine
from speki.services.card_type_model import CardView, into_type
from speki.services.class_hierarchy_index import ClassHierarchyIndex
from speki.services.handler_helpers import ask_text, pick_card

logger = logging.getLogger(__name__)


class ClassHandlers:
    """Transitions that edit class membership, class parents and answer references."""

    def __init__(self, store: CardStore, prompter: Prompter):
        self.store = store
        self.prompter = prompter
        self.view = CardView(store)
        self.hierarchy = ClassHierarchyIndex(store)
        self.attributes = AttributeResolutionEngine(store, self.hierarchy)

    def set_parent_class(self, card: Card) -> dict:
        """Point a class at a parent class. Self-parenting leaves the card unchanged."""
        error = check_legal_source(card, TransitionKind.SET_PARENT_CLASS)
        if error:
            return error
        classes = self.hierarchy.class_ids()
        parent, stop = pick_card(
            self.prompter, PromptSlot.PARENT_CLASS, "Which parent class?", classes,
        )
        if stop:
            return stop
        if parent == card.id:
            logger.debug("Ignored self-parenting", extra={"card_id": str(card.id)})
            return ok(card, "A class cannot be its own parent; nothing changed.", changed=False)

        match card.card_type:
            case ClassCard() as class_type:
                new_type = replace(class_type, parent_class=parent)
            case _:
                return rejected("ILLEGAL_SOURCE", "Only classes have a parent class.")
        updated = into_type(self.store, card.id, new_type)
        return ok(updated, f"Parent class set to '{self.view.front_of(parent)}'.")

    def change_class(self, card: Card) -> dict:
        """Move an Instance to another class."""
        error = check_legal_source(card, TransitionKind.CHANGE_CLASS)
        if error:
            return error
        classes = self.hierarchy.class_ids()
        error = check_candidates_exist(classes, "NO_CLASSES", "No classes exist yet.")
        if error:
            return error
        class_id, stop = pick_card(
            self.prompter, PromptSlot.TARGET_CLASS, "Which class?", classes,
        )
        if stop:
            return stop

        match card.card_type:
            case InstanceCard() as instance_type:
                new_type = replace(instance_type, class_id=class_id)
            case _:
                return rejected("ILLEGAL_SOURCE", "Only instances belong to a class.")
        updated = into_type(self.store, card.id, new_type)
        return ok(updated, f"Class set to '{self.view.front_of(class_id)}'.")

    def new_class(self, card: Card) -> dict:
        """Create a class by name and make the card an instance of it."""
        error = check_legal_source(card, TransitionKind.NEW_CLASS)
        if error:
            return error
        name = self.view.front(card).strip()
        if not name:
            return cancelled("Card has no name to give the instance.")
        class_name, stop = ask_text(self.prompter, PromptSlot.NAME, "Class name")
        if stop:
            return stop

        class_id = self.store.create_card(
            ClassCard(name=class_name, back=TextBack("")), card.category,
        )
        updated = into_type(self.store, card.id, InstanceCard(name=name, class_id=class_id))
        return ok(
            updated, f"Created class '{class_name}'; '{name}' is now an instance of it.",
            class_id=str(class_id),
        )

    def set_back_reference(self, card: Card) -> dict:
        """Make the card's answer a reference to another card."""
        error = check_legal_source(card, TransitionKind.SET_BACK_REFERENCE)
        if error:
            return error
        if isinstance(card.card_type, AttributeCard):
            error = self._check_back_type(card.card_type)
            if error:
                return error
            candidates = self.attributes.resolve_back_candidates(card.card_type.attribute)
            choices = list(candidates.cards) if candidates.restricted else self._other_cards(card)
        else:
            choices = self._other_cards(card)
        error = check_candidates_exist(
            choices, "NO_BACK_CANDIDATES", "No cards available to reference.",
        )
        if error:
            return error
        ref, stop = pick_card(
            self.prompter, PromptSlot.BACK_REFERENCE, "Which card is the answer?", choices,
        )
        if stop:
            return stop

        new_type = with_back(card.card_type, CardBack(ref))
        if new_type is None:
            return rejected("ILLEGAL_SOURCE", "This card has no answer to reference.")
        updated = into_type(self.store, card.id, new_type)
        return ok(updated, f"Answer now references '{self.view.front_of(ref)}'.")

    def _other_cards(self, card: Card) -> list[CardId]:
        return [c.id for c in self.store.all_cards() if c.id != card.id]

    def _check_back_type(self, attribute_card: AttributeCard) -> dict | None:
        back_type = self.store.load_attribute(attribute_card.attribute).back_type
        if back_type is None:
            return None
        class_card = self.store.load(back_type)
        return check_class_card(class_card, self.view.front(class_card))
