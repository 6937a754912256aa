"""Attribute Resolution — inherited pattern lookup and back-side constraints.

Invariants:
    - All functions are PURE: no IO, patterns and candidates are handed in
    - Patterns declared on a class are visible to instances of every subclass
    - Inherited patterns are deduplicated by id, in ancestor-chain order
    - back_type set => the answer must be a card from the allowed set; free text rejected
    - back_type unset => any answer is accepted

Design Decisions:
    - check_* return rejection dicts (not exceptions), matching enforce_transitions
    - BackCandidates distinguishes "unrestricted" (cards=None) from "restricted to nothing"
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import assert_never

from speki.core.card_types import Attribute, BackSide, CardBack, TextBack
from speki.core.domain_types import AttributeId, CardId
from speki.core.transition_outcomes import rejected


@dataclass(frozen=True)
class BackCandidates:
    """What an attribute accepts as an answer."""
    free_text_allowed: bool
    cards: tuple[CardId, ...] | None = None

    @property
    def restricted(self) -> bool:
        return self.cards is not None

    def accepts(self, back: BackSide) -> bool:
        if isinstance(back, TextBack):
            return self.free_text_allowed
        return self.cards is None or back.card_id in self.cards


UNRESTRICTED = BackCandidates(free_text_allowed=True)


def collect_patterns(
    chain: Sequence[CardId],
    declared: Mapping[CardId, Iterable[Attribute]],
) -> list[Attribute]:
    """Union of patterns declared on every class in chain, first occurrence wins."""
    seen: set[AttributeId] = set()
    patterns: list[Attribute] = []
    for class_id in chain:
        for attribute in declared.get(class_id, ()):
            if attribute.id not in seen:
                seen.add(attribute.id)
                patterns.append(attribute)
    return patterns


def back_candidates(
    attribute: Attribute, subclass_instances: Iterable[CardId],
) -> BackCandidates:
    """Narrow legal answers. subclass_instances is only consulted when back_type is set."""
    if attribute.back_type is None:
        return UNRESTRICTED
    return BackCandidates(
        free_text_allowed=False, cards=tuple(subclass_instances),
    )


def check_answer(
    attribute: Attribute, candidates: BackCandidates, back: BackSide,
) -> dict | None:
    """Reject answers the pattern's back_type does not allow."""
    if candidates.accepts(back):
        return None
    match back:
        case TextBack():
            return rejected(
                "FREE_TEXT_NOT_ALLOWED",
                f"Pattern '{attribute.pattern}' requires a card answer, not free text.",
            )
        case CardBack(card_id=card_id):
            return rejected(
                "BACK_NOT_IN_CLASS",
                f"Card '{card_id}' is not an instance of the class "
                f"required by pattern '{attribute.pattern}'.",
            )
        case _:
            assert_never(back)


def check_patterns_available(
    patterns: Sequence[Attribute], class_name: str,
) -> dict | None:
    """A class with no patterns (inherited included) is a notice, never a silent no-op."""
    if not patterns:
        return rejected(
            "NO_PATTERNS",
            f"No attribute patterns for class '{class_name}'. Try creating one.",
        )
    return None
