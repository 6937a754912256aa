"""Scripted Prompter — Prompter implementation backed by pre-supplied answers.

Invariants:
    - A slot with no answer behaves like the user declining (returns None)
    - Answers are returned as given; the transition layer checks them against candidates
    - Every prompt is recorded in asked, in order

Design Decisions:
    - Used by the HTTP shell (answers arrive in the request body) and by tests;
      an interactive terminal prompter would implement the same protocol
"""

from collections.abc import Mapping, Sequence
from uuid import UUID

from speki.core.card_types import Attribute
from speki.core.domain_types import AttributeId, CardId, PromptSlot


class ScriptedPrompter:
    """Answers prompts from a slot -> value mapping."""

    def __init__(self, answers: Mapping[PromptSlot, object] | None = None):
        self._answers = dict(answers or {})
        self.asked: list[tuple[PromptSlot, str]] = []

    def choose_card(
        self, slot: PromptSlot, prompt: str, candidates: Sequence[CardId],
    ) -> CardId | None:
        self.asked.append((slot, prompt))
        value = self._answers.get(slot)
        return CardId(_as_uuid(value)) if value is not None else None

    def choose_attribute(
        self, slot: PromptSlot, prompt: str, candidates: Sequence[Attribute],
    ) -> AttributeId | None:
        self.asked.append((slot, prompt))
        value = self._answers.get(slot)
        return AttributeId(_as_uuid(value)) if value is not None else None

    def ask_text(self, slot: PromptSlot, prompt: str) -> str | None:
        self.asked.append((slot, prompt))
        value = self._answers.get(slot)
        return str(value) if value is not None else None

    def slots_asked(self) -> list[PromptSlot]:
        return [slot for slot, _ in self.asked]


def _as_uuid(value: object) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))
