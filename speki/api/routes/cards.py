"""Card Routes — add cards, view them, and edit their dependency edges.

Invariants:
    - POST /cards: blank back creates an Unfinished card; blank front fails validation
    - Unknown card ids → 404 via ReferenceNotFoundError (raised by the store)
    - Dependency edges are idempotent: re-adding reports added=false
    - A new linked card with a blank front is a cancellation, nothing is written

Design Decisions:
    - Thin routes: all graph logic lives in DependencyGraphEditor
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from speki.api.dependencies import get_store
from speki.api.routes.card_presenters import card_response
from speki.config import get_settings
from speki.core.card_types import draft_card
from speki.core.domain_types import CardId, Category
from speki.core.repository_protocols import CardStore
from speki.schemas.card import (
    CardCreate, CardResponse, DependencyCreate, DependencyOverview, DependencyResult,
)
from speki.services.card_type_model import CardView
from speki.services.dependency_editor import DependencyGraphEditor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cards", tags=["cards"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CardResponse)
async def create_card(body: CardCreate, store: CardStore = Depends(get_store)):
    """Add a card from front/back text."""
    category = Category(body.category or get_settings().default_category)
    card_type = draft_card(body.front, body.back)
    if card_type is None:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, detail="Card front must not be blank",
        )
    card_id = store.create_card(card_type, category)
    logger.info("Card added", extra={"card_id": str(card_id)})
    return card_response(store.load(card_id), CardView(store))


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(card_id: UUID, store: CardStore = Depends(get_store)):
    return card_response(store.load(CardId(card_id)), CardView(store))


@router.get("/{card_id}/dependencies", response_model=DependencyOverview)
async def get_dependencies(card_id: UUID, store: CardStore = Depends(get_store)):
    """Dependencies and dependents of a card, with rendered fronts."""
    return DependencyGraphEditor(store).overview(CardId(card_id))


@router.post("/{card_id}/dependencies", response_model=DependencyResult)
async def add_dependency(
    card_id: UUID, body: DependencyCreate, store: CardStore = Depends(get_store),
):
    """Make card_id depend on an existing or newly created card."""
    editor = DependencyGraphEditor(store)
    if body.card_id is not None:
        added = editor.add_edge(CardId(body.card_id), CardId(card_id))
        return DependencyResult(status="ok", card_id=body.card_id, added=added)
    new_id = editor.add_new_dependency(CardId(card_id), body.front or "", body.back)
    return _created(new_id)


@router.post("/{card_id}/dependents", response_model=DependencyResult)
async def add_dependent(
    card_id: UUID, body: DependencyCreate, store: CardStore = Depends(get_store),
):
    """Make an existing or newly created card depend on card_id."""
    editor = DependencyGraphEditor(store)
    if body.card_id is not None:
        added = editor.add_edge(CardId(card_id), CardId(body.card_id))
        return DependencyResult(status="ok", card_id=body.card_id, added=added)
    new_id = editor.add_new_dependent(CardId(card_id), body.front or "", body.back)
    return _created(new_id)


def _created(new_id: CardId | None) -> DependencyResult:
    if new_id is None:
        return DependencyResult(status="cancelled")
    return DependencyResult(status="ok", card_id=new_id, created=True, added=True)
