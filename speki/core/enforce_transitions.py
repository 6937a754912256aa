"""Transition Enforcement — guards for converting a card between variants.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Return rejection dict on violation, None on success
    - LEGAL_SOURCES is the single source of truth for which variants a transition accepts
    - A prompter's answer is only accepted if it is one of the offered candidates
    - Class references are re-checked at use: a retyped class is a rejection, not an exception

Design Decisions:
    - Pure functions over method dispatch: testable without mocks
    - Return dicts (not exceptions): handlers return them as-is so a rejected
      transition has the same shape as a successful one
"""

from collections.abc import Collection

from speki.core.card_types import BackSide, Card
from speki.core.domain_types import CardKind, TransitionKind
from speki.core.transition_outcomes import rejected

_ANY_KIND = frozenset(CardKind)
_PLAIN_TEXT_KINDS = frozenset({
    CardKind.NORMAL, CardKind.UNFINISHED, CardKind.STATEMENT, CardKind.EVENT,
})

LEGAL_SOURCES: dict[TransitionKind, frozenset[CardKind]] = {
    TransitionKind.INTO_INSTANCE: _PLAIN_TEXT_KINDS,
    TransitionKind.INTO_CLASS: _ANY_KIND,
    TransitionKind.INTO_STATEMENT: _ANY_KIND,
    TransitionKind.INTO_EVENT: _ANY_KIND,
    TransitionKind.INTO_ATTRIBUTE: frozenset({CardKind.NORMAL, CardKind.UNFINISHED}),
    TransitionKind.ATTRIBUTE_FROM_DEPENDENCY: _ANY_KIND,
    TransitionKind.SET_PARENT_CLASS: frozenset({CardKind.CLASS}),
    TransitionKind.NEW_ATTRIBUTE_PATTERN: frozenset({CardKind.INSTANCE}),
    TransitionKind.FINISH_UNFINISHED: frozenset({CardKind.UNFINISHED}),
    TransitionKind.CHANGE_CLASS: frozenset({CardKind.INSTANCE}),
    TransitionKind.NEW_CLASS: _PLAIN_TEXT_KINDS | {CardKind.INSTANCE},
    TransitionKind.FILL_ATTRIBUTE: frozenset({CardKind.INSTANCE}),
    TransitionKind.SET_BACK_REFERENCE: frozenset({
        CardKind.NORMAL, CardKind.UNFINISHED, CardKind.CLASS, CardKind.ATTRIBUTE,
    }),
}


def check_legal_source(card: Card, transition: TransitionKind) -> dict | None:
    """The card's current variant must be a legal source for the transition."""
    legal = LEGAL_SOURCES[transition]
    if card.kind not in legal:
        allowed = ", ".join(sorted(kind.value for kind in legal))
        return rejected(
            "ILLEGAL_SOURCE",
            f"{transition.value} is not available for {card.kind.value} cards "
            f"(allowed: {allowed}).",
        )
    return None


def check_candidates_exist(
    candidates: Collection[object], code: str, message: str,
) -> dict | None:
    """Nothing to choose from is a notice, not a crash."""
    if not candidates:
        return rejected(code, message)
    return None


def check_choice(choice: object, candidates: Collection[object]) -> dict | None:
    """A prompter answer outside the offered candidates is rejected."""
    if choice not in candidates:
        return rejected("INVALID_CHOICE", f"'{choice}' is not one of the offered choices.")
    return None


def check_back_present(back: BackSide | None) -> dict | None:
    """Reusing a card's answer requires the card to have one."""
    if back is None:
        return rejected("NO_BACK_SIDE", "Card has no answer to reuse.")
    return None


def check_class_card(card: Card, name: str) -> dict | None:
    """A class an instance or pattern points at may since have been retyped."""
    if card.kind is not CardKind.CLASS:
        return rejected(
            "NOT_A_CLASS",
            f"'{name}' is now a {card.kind.value} card, not a class.",
        )
    return None
