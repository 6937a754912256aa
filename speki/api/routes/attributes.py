"""Attribute Routes — pattern lookup and legal answers.

Invariants:
    - Unknown attribute ids → 404
    - back-candidates: cards is null when free text is accepted
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from speki.api.dependencies import get_store
from speki.api.routes.card_presenters import attribute_response, card_refs
from speki.core.domain_types import AttributeId
from speki.core.repository_protocols import CardStore
from speki.schemas.card import AttributeResponse, BackCandidatesResponse
from speki.services.attribute_engine import AttributeResolutionEngine
from speki.services.card_type_model import CardView

router = APIRouter(prefix="/attributes", tags=["attributes"])


@router.get("/{attribute_id}", response_model=AttributeResponse)
async def get_attribute(attribute_id: UUID, store: CardStore = Depends(get_store)):
    return attribute_response(store.load_attribute(AttributeId(attribute_id)))


@router.get("/{attribute_id}/back-candidates", response_model=BackCandidatesResponse)
async def get_back_candidates(attribute_id: UUID, store: CardStore = Depends(get_store)):
    """Which answers the pattern accepts."""
    engine = AttributeResolutionEngine(store)
    candidates = engine.resolve_back_candidates(AttributeId(attribute_id))
    cards = (
        card_refs(candidates.cards, CardView(store))
        if candidates.cards is not None else None
    )
    return BackCandidatesResponse(
        attribute_id=attribute_id,
        free_text_allowed=candidates.free_text_allowed,
        cards=cards,
    )
