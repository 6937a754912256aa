"""Handler Helpers — prompter interactions shared by the transition handlers.

Invariants:
    - Each helper returns (value, None) on success or (None, outcome) when the
      transition must stop; the outcome is returned to the caller unchanged
    - A declined prompt (None) or blank text is a cancellation, never an error
    - An answer outside the offered candidates is rejected with INVALID_CHOICE
"""

from collections.abc import Sequence

from speki.core.card_types import Attribute
from speki.core.domain_types import AttributeId, CardId, PromptSlot
from speki.core.enforce_transitions import check_choice
from speki.core.repository_protocols import Prompter
from speki.core.transition_outcomes import cancelled


def pick_card(
    prompter: Prompter, slot: PromptSlot, prompt: str, candidates: Sequence[CardId],
) -> tuple[CardId | None, dict | None]:
    choice = prompter.choose_card(slot, prompt, candidates)
    if choice is None:
        return None, cancelled()
    error = check_choice(choice, candidates)
    if error:
        return None, error
    return choice, None


def pick_attribute(
    prompter: Prompter, slot: PromptSlot, prompt: str, candidates: Sequence[Attribute],
) -> tuple[Attribute | None, dict | None]:
    choice = prompter.choose_attribute(slot, prompt, candidates)
    if choice is None:
        return None, cancelled()
    by_id: dict[AttributeId, Attribute] = {a.id: a for a in candidates}
    error = check_choice(choice, by_id)
    if error:
        return None, error
    return by_id[choice], None


def ask_text(
    prompter: Prompter, slot: PromptSlot, prompt: str,
) -> tuple[str | None, dict | None]:
    text = prompter.ask_text(slot, prompt)
    if text is None or not text.strip():
        return None, cancelled()
    return text.strip(), None
