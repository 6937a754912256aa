"""Retype Handlers — into_instance, into_class, into_statement, into_event, finish_unfinished.

Invariants:
    - Legal sources checked via core/enforce_transitions before prompting
    - New names/fronts are taken from the card's current rendered front
    - An empty name for a new Class/Instance is a cancellation, not an error
    - Only the payload is replaced; id and category are preserved by into_type
"""

from speki.core.card_types import (
    Card, ClassCard, EventCard, InstanceCard, NormalCard, StatementCard, TextBack, back_of,
)
from speki.core.domain_types import PromptSlot, TransitionKind
from speki.core.enforce_transitions import check_candidates_exist, check_legal_source
from speki.core.repository_protocols import CardStore, Prompter
from speki.core.transition_outcomes import cancelled, ok
from speki.services.card_type_model import CardView, into_type
from speki.services.class_hierarchy_index import ClassHierarchyIndex
from speki.services.handler_helpers import ask_text, pick_card


class RetypeHandlers:
    """Transitions that only swap a card's variant."""

    def __init__(self, store: CardStore, prompter: Prompter):
        self.store = store
        self.prompter = prompter
        self.view = CardView(store)
        self.hierarchy = ClassHierarchyIndex(store)

    def into_instance(self, card: Card) -> dict:
        """Make the card an Instance of a chosen class, named after its front."""
        error = check_legal_source(card, TransitionKind.INTO_INSTANCE)
        if error:
            return error
        name = self.view.front(card).strip()
        if not name:
            return cancelled("Card has no name to give the instance.")

        classes = self.hierarchy.class_ids()
        error = check_candidates_exist(classes, "NO_CLASSES", "No classes exist yet.")
        if error:
            return error
        class_id, stop = pick_card(
            self.prompter, PromptSlot.TARGET_CLASS, "Which class?", classes,
        )
        if stop:
            return stop

        updated = into_type(self.store, card.id, InstanceCard(name=name, class_id=class_id))
        return ok(updated, f"'{name}' is now an instance of '{self.view.front_of(class_id)}'.")

    def into_class(self, card: Card) -> dict:
        """Make the card a root, non-event Class carrying its current front and back."""
        error = check_legal_source(card, TransitionKind.INTO_CLASS)
        if error:
            return error
        name = self.view.front(card).strip()
        if not name:
            return cancelled("Card has no name to give the class.")
        back = back_of(card.card_type) or TextBack("")
        updated = into_type(self.store, card.id, ClassCard(name=name, back=back))
        return ok(updated, f"'{name}' is now a class.")

    def into_statement(self, card: Card) -> dict:
        error = check_legal_source(card, TransitionKind.INTO_STATEMENT)
        if error:
            return error
        updated = into_type(self.store, card.id, StatementCard(front=self.view.front(card)))
        return ok(updated, "Card is now a statement.")

    def into_event(self, card: Card) -> dict:
        error = check_legal_source(card, TransitionKind.INTO_EVENT)
        if error:
            return error
        updated = into_type(self.store, card.id, EventCard(front=self.view.front(card)))
        return ok(updated, "Card is now an event.")

    def finish_unfinished(self, card: Card) -> dict:
        """Give an Unfinished card its answer, making it Normal."""
        error = check_legal_source(card, TransitionKind.FINISH_UNFINISHED)
        if error:
            return error
        front = self.view.front(card)
        answer, stop = ask_text(self.prompter, PromptSlot.ANSWER_TEXT, front)
        if stop:
            return stop
        updated = into_type(self.store, card.id, NormalCard(front=front, back=TextBack(answer)))
        return ok(updated, "Card finished.")
