"""Transition Dispatch — explicit routing from transition name to handler.

Invariants:
    - Every transition->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown transitions return UNKNOWN_TRANSITION (never raise)
    - Unknown card ids propagate ReferenceNotFoundError before any handler runs
    - Every outcome is logged with card_id, transition and error_code
    - SpekiErrors leave with card_id and transition filled into their context

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Split handlers by concern: retype / classes / attributes, a handful of methods each
    - Short action aliases resolved here so every front-end shares one keymap
"""

import logging

from speki.core.domain_types import CardId, OutcomeStatus, TransitionKind
from speki.core.errors import SpekiError
from speki.core.repository_protocols import CardStore, Prompter
from speki.core.transition_outcomes import rejected
from speki.services.handle_attributes import AttributeHandlers
from speki.services.handle_classes import ClassHandlers
from speki.services.handle_retype import RetypeHandlers

logger = logging.getLogger(__name__)

# Short keys accepted wherever a transition name is.
ACTION_ALIASES: dict[str, TransitionKind] = {
    "ii": TransitionKind.INTO_INSTANCE,
    "ic": TransitionKind.INTO_CLASS,
    "is": TransitionKind.INTO_STATEMENT,
    "ie": TransitionKind.INTO_EVENT,
    "ia": TransitionKind.INTO_ATTRIBUTE,
    "a": TransitionKind.ATTRIBUTE_FROM_DEPENDENCY,
    "A": TransitionKind.NEW_ATTRIBUTE_PATTERN,
    "fa": TransitionKind.FILL_ATTRIBUTE,
    "p": TransitionKind.SET_PARENT_CLASS,
    "c": TransitionKind.CHANGE_CLASS,
    "C": TransitionKind.NEW_CLASS,
    "ref": TransitionKind.SET_BACK_REFERENCE,
    "f": TransitionKind.FINISH_UNFINISHED,
}


def resolve_action(text: str) -> TransitionKind | None:
    """Alias or full transition name -> TransitionKind; None if neither."""
    text = text.strip()
    if text in ACTION_ALIASES:
        return ACTION_ALIASES[text]
    try:
        return TransitionKind(text)
    except ValueError:
        return None


class TransitionDispatch:
    """Routes transition -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, store: CardStore, prompter: Prompter):
        self._store = store
        retype = RetypeHandlers(store, prompter)
        classes = ClassHandlers(store, prompter)
        attributes = AttributeHandlers(store, prompter)

        # every mapping explicit — adding a transition requires editing this dict
        self._handlers = {
            # Retype (5)
            TransitionKind.INTO_INSTANCE: retype.into_instance,
            TransitionKind.INTO_CLASS: retype.into_class,
            TransitionKind.INTO_STATEMENT: retype.into_statement,
            TransitionKind.INTO_EVENT: retype.into_event,
            TransitionKind.FINISH_UNFINISHED: retype.finish_unfinished,

            # Classes (4)
            TransitionKind.SET_PARENT_CLASS: classes.set_parent_class,
            TransitionKind.CHANGE_CLASS: classes.change_class,
            TransitionKind.NEW_CLASS: classes.new_class,
            TransitionKind.SET_BACK_REFERENCE: classes.set_back_reference,

            # Attributes (4)
            TransitionKind.INTO_ATTRIBUTE: attributes.into_attribute,
            TransitionKind.ATTRIBUTE_FROM_DEPENDENCY: attributes.attribute_from_dependency,
            TransitionKind.NEW_ATTRIBUTE_PATTERN: attributes.new_attribute_pattern,
            TransitionKind.FILL_ATTRIBUTE: attributes.fill_attribute,
        }

    @property
    def transitions(self) -> list[TransitionKind]:
        return list(self._handlers)

    def execute(self, transition: str, card_id: CardId) -> dict:
        """Route transition to its handler. Returns the outcome dict. Logs every call."""
        try:
            card = self._store.load(card_id)
            kind = resolve_action(transition)
            handler = self._handlers.get(kind) if kind is not None else None
            if handler is None:
                result = rejected(
                    "UNKNOWN_TRANSITION", f"Transition '{transition}' does not exist.",
                )
            else:
                result = handler(card)
        except SpekiError as exc:
            exc.context.card_id = exc.context.card_id or str(card_id)
            exc.context.transition = exc.context.transition or transition
            raise
        self._log_outcome(transition, card_id, result)
        return result

    def _log_outcome(self, transition: str, card_id: CardId, result: dict) -> None:
        extra = {
            "card_id": str(card_id),
            "transition": transition,
            "error_code": result.get("error_code"),
        }
        if result.get("status") == OutcomeStatus.REJECTED.value:
            logger.warning(f"Transition rejected: {result['message']}", extra=extra)
        else:
            logger.info(f"Transition {result['status']}: {result['message']}", extra=extra)
