"""Transition Routes — run a type transition on a card.

Invariants:
    - The request body answers the transition's prompts; omitted answers = declined
    - Rejected and cancelled transitions are 200 responses carrying their status
    - Unknown card → 404; unknown transition name → status rejected, UNKNOWN_TRANSITION
    - The response always carries the card as it is after the transition
      and the prompt slots that were asked

Design Decisions:
    - Accepts full transition names and short action aliases (resolve_action)
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from speki.api.dependencies import get_store
from speki.api.routes.card_presenters import card_response
from speki.core.domain_types import CardId
from speki.core.repository_protocols import CardStore
from speki.infrastructure.scripted_prompter import ScriptedPrompter
from speki.schemas.transition import TransitionRequest, TransitionResult
from speki.services.card_type_model import CardView
from speki.services.transition_dispatch import TransitionDispatch

router = APIRouter(prefix="/cards", tags=["transitions"])


@router.post("/{card_id}/transitions/{transition}", response_model=TransitionResult)
async def run_transition(
    card_id: UUID,
    transition: str,
    body: TransitionRequest | None = None,
    store: CardStore = Depends(get_store),
):
    prompter = ScriptedPrompter((body or TransitionRequest()).answers())
    dispatch = TransitionDispatch(store, prompter)
    outcome = dispatch.execute(transition, CardId(card_id))
    card = store.load(CardId(card_id))
    return TransitionResult(
        **outcome, asked=prompter.slots_asked(), card=card_response(card, CardView(store)),
    )
