"""Transition Schemas — request answers and result shape for running a transition.

Invariants:
    - Every TransitionRequest field maps to exactly one PromptSlot
    - An omitted field means the user declined that prompt
    - TransitionResult.status is one of ok / rejected / cancelled
    - TransitionResult.asked lists the prompts the transition put, in order

Design Decisions:
    - Answers supplied up front instead of an interactive round-trip: the
      transition asks its questions of a ScriptedPrompter built from the body
"""

from uuid import UUID

from pydantic import BaseModel, Field

from speki.core.domain_types import OutcomeStatus, PromptSlot
from speki.schemas.card import CardResponse


class TransitionRequest(BaseModel):
    """Answers to the prompts a transition may ask."""
    target_class: UUID | None = None
    instance: UUID | None = None
    attribute: UUID | None = None
    answer_card: UUID | None = None
    answer_text: str | None = Field(None, max_length=10_000)
    name: str | None = Field(None, max_length=10_000)
    pattern: str | None = Field(None, max_length=10_000)
    back_type: UUID | None = None
    parent_class: UUID | None = None
    back_reference: UUID | None = None

    def answers(self) -> dict[PromptSlot, object]:
        """Slot -> answer for every field that was supplied."""
        return {
            PromptSlot(field): value
            for field, value in self.model_dump().items()
            if value is not None
        }


class TransitionResult(BaseModel):
    """Transition outcome plus the card as it is afterwards."""
    status: OutcomeStatus
    message: str
    error_code: str | None = None
    changed: bool | None = None
    attribute_id: UUID | None = None
    class_id: UUID | None = None
    created_card_id: UUID | None = None
    asked: list[PromptSlot] = []
    card: CardResponse
