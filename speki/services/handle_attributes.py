"""Attribute Handlers — into_attribute, attribute_from_dependency, new_attribute_pattern, fill_attribute.

Invariants:
    - An attribute card's instance is always an Instance card, and its pattern is
      one of attributes_for(instance's class) — so the pattern's class is the
      instance's class or an ancestor of it
    - back_type set => the answer is chosen among resolve_back_candidates; free text rejected
    - Zero usable patterns => NO_PATTERNS notice, nothing written
    - attribute_from_dependency: 0 instance dependencies => rejected, 1 => used
      implicitly, 2+ => the user must choose
    - An instance's class or a pattern's back_type that was retyped away from
      Class => NOT_A_CLASS notice, never an exception
    - new_attribute_pattern and fill_attribute never retype the current card

Design Decisions:
    - Pattern choice and answer choice shared by all four handlers via private helpers
"""

from speki.core.attribute_resolution import check_patterns_available
from speki.core.card_types import (
    Attribute, AttributeCard, BackSide, Card, CardBack, InstanceCard, TextBack, back_of,
)
from speki.core.dependency_graph import check_instance_dependency
from speki.core.domain_types import CardId, PromptSlot, TransitionKind
from speki.core.enforce_transitions import (
    check_back_present, check_candidates_exist, check_choice, check_class_card,
    check_legal_source,
)
from speki.core.repository_protocols import CardStore, Prompter
from speki.core.transition_outcomes import ok, rejected
from speki.services.attribute_engine import AttributeResolutionEngine
from speki.services.card_type_model import CardView, into_type
from speki.services.class_hierarchy_index import ClassHierarchyIndex
from speki.services.dependency_editor import DependencyGraphEditor
from speki.services.handler_helpers import ask_text, pick_attribute, pick_card


class AttributeHandlers:
    """Transitions that create attribute patterns or attribute cards."""

    def __init__(self, store: CardStore, prompter: Prompter):
        self.store = store
        self.prompter = prompter
        self.view = CardView(store)
        self.hierarchy = ClassHierarchyIndex(store)
        self.attributes = AttributeResolutionEngine(store, self.hierarchy)
        self.dependencies = DependencyGraphEditor(store)

    def into_attribute(self, card: Card) -> dict:
        """Turn a plain card into an attribute card of a chosen instance."""
        error = check_legal_source(card, TransitionKind.INTO_ATTRIBUTE)
        if error:
            return error
        instances = self.hierarchy.instance_ids()
        error = check_candidates_exist(instances, "NO_INSTANCES", "No instances exist yet.")
        if error:
            return error
        instance_id, stop = pick_card(
            self.prompter, PromptSlot.INSTANCE, "Which instance?", instances,
        )
        if stop:
            return stop
        instance = self.store.load(instance_id)

        attribute, stop = self._choose_pattern(instance)
        if stop:
            return stop
        back, stop = self._choose_answer(attribute, instance, back_of(card.card_type))
        if stop:
            return stop

        new_type = AttributeCard(attribute=attribute.id, back=back, instance=instance.id)
        updated = into_type(self.store, card.id, new_type)
        return ok(updated, f"Card is now '{self.view.front(updated)}'.")

    def attribute_from_dependency(self, card: Card) -> dict:
        """Mark an existing card as the answer of a pattern about its instance dependency."""
        error = check_legal_source(card, TransitionKind.ATTRIBUTE_FROM_DEPENDENCY)
        if error:
            return error
        candidates = self.dependencies.instance_dependencies(card.id)
        error = check_instance_dependency(candidates)
        if error:
            return error
        if len(candidates) == 1:
            instance = candidates[0]
        else:
            instance_id, stop = pick_card(
                self.prompter, PromptSlot.INSTANCE, "Which instance?",
                [c.id for c in candidates],
            )
            if stop:
                return stop
            instance = self.store.load(instance_id)

        attribute, stop = self._choose_pattern(instance)
        if stop:
            return stop
        back = back_of(card.card_type)
        error = (
            check_back_present(back)
            or self._check_back_type(attribute)
            or self.attributes.check_answer(attribute.id, back)
        )
        if error:
            return error

        new_type = AttributeCard(attribute=attribute.id, back=back, instance=instance.id)
        updated = into_type(self.store, card.id, new_type)
        return ok(updated, f"Card is now '{self.view.front(updated)}'.")

    def new_attribute_pattern(self, card: Card) -> dict:
        """Declare a new pattern on the current instance's class."""
        error = check_legal_source(card, TransitionKind.NEW_ATTRIBUTE_PATTERN)
        if error:
            return error
        class_id = _class_of(card)
        error = self._check_class(class_id)
        if error:
            return error
        pattern, stop = ask_text(self.prompter, PromptSlot.PATTERN, "Attribute pattern")
        if stop:
            return stop
        classes = self.hierarchy.class_ids()
        back_type = self.prompter.choose_card(
            PromptSlot.BACK_TYPE, "Which class should the answer belong to?", classes,
        )
        # Declining the back-type prompt means the answer stays free text.
        if back_type is not None:
            error = check_choice(back_type, classes)
            if error:
                return error

        attribute_id = self.attributes.create(pattern, class_id, back_type)
        return ok(
            card, f"New pattern '{pattern}' created.", changed=False,
            attribute_id=str(attribute_id),
        )

    def fill_attribute(self, card: Card) -> dict:
        """Create a new attribute card answering a pattern about the current instance."""
        error = check_legal_source(card, TransitionKind.FILL_ATTRIBUTE)
        if error:
            return error
        attribute, stop = self._choose_pattern(card)
        if stop:
            return stop
        back, stop = self._choose_answer(attribute, card, None)
        if stop:
            return stop

        new_type = AttributeCard(attribute=attribute.id, back=back, instance=card.id)
        new_id = self.store.create_card(new_type, card.category)
        return ok(
            card, f"Created '{self.view.front_of(new_id)}'.", changed=False,
            created_card_id=str(new_id),
        )

    # --- Helpers ----------------------------------------------------------------

    def _check_class(self, class_id: CardId | None) -> dict | None:
        if class_id is None:
            return rejected("NOT_A_CLASS", "Card is not an instance of any class.")
        class_card = self.store.load(class_id)
        return check_class_card(class_card, self.view.front(class_card))

    def _check_back_type(self, attribute: Attribute) -> dict | None:
        if attribute.back_type is None:
            return None
        return self._check_class(attribute.back_type)

    def _choose_pattern(self, instance: Card) -> tuple[Attribute | None, dict | None]:
        class_id = _class_of(instance)
        error = self._check_class(class_id)
        if error:
            return None, error
        patterns = self.attributes.attributes_for(class_id, instance.id)
        error = check_patterns_available(patterns, self.view.front_of(class_id))
        if error:
            return None, error
        return pick_attribute(
            self.prompter, PromptSlot.ATTRIBUTE, "Which attribute among the class?", patterns,
        )

    def _choose_answer(
        self, attribute: Attribute, instance: Card, current: BackSide | None,
    ) -> tuple[BackSide | None, dict | None]:
        """Card answer when back_type is set; otherwise the current answer or free text."""
        if attribute.back_type is not None:
            error = self._check_back_type(attribute)
            if error:
                return None, error
            candidates = self.attributes.resolve_back_candidates(attribute.id)
            allowed = list(candidates.cards or ())
            error = check_candidates_exist(
                allowed, "NO_BACK_CANDIDATES",
                f"No instances of '{self.view.front_of(attribute.back_type)}' to answer with.",
            )
            if error:
                return None, error
            answer, stop = pick_card(
                self.prompter, PromptSlot.ANSWER_CARD,
                f"Answer must belong to '{self.view.front_of(attribute.back_type)}'",
                allowed,
            )
            return (CardBack(answer), None) if answer is not None else (None, stop)
        if current is not None:
            return current, None
        question = self.attributes.question_for(attribute.id, instance.id)
        text, stop = ask_text(self.prompter, PromptSlot.ANSWER_TEXT, question)
        return (TextBack(text), None) if text is not None else (None, stop)


def _class_of(card: Card) -> CardId | None:
    match card.card_type:
        case InstanceCard(class_id=class_id):
            return class_id
        case _:
            return None
