"""Class Routes — hierarchy queries and attribute patterns of a class.

Invariants:
    - descendants and subclass-cards include the class itself and are cycle-safe
    - Every route takes a Class card id; any other variant → 400 CARD_KIND_MISMATCH
    - /attributes includes inherited patterns unless class_only=true
    - ?instance= must name an Instance card (validated, does not filter)
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from speki.api.dependencies import get_store
from speki.api.routes.card_presenters import attribute_response, card_refs
from speki.core.domain_types import CardId
from speki.core.repository_protocols import CardStore
from speki.schemas.card import (
    AncestorChain, AttributeResponse, DescendantClasses, SubclassCards,
)
from speki.services.attribute_engine import AttributeResolutionEngine
from speki.services.card_type_model import CardView
from speki.services.class_hierarchy_index import ClassHierarchyIndex

router = APIRouter(prefix="/classes", tags=["classes"])


@router.get("/{class_id}/ancestors", response_model=AncestorChain)
async def get_ancestors(class_id: UUID, store: CardStore = Depends(get_store)):
    """The class itself, then each parent up to the root."""
    chain = ClassHierarchyIndex(store).ancestor_chain(CardId(class_id))
    return AncestorChain(class_id=class_id, ancestors=card_refs(chain, CardView(store)))


@router.get("/{class_id}/subclass-cards", response_model=SubclassCards)
async def get_subclass_cards(class_id: UUID, store: CardStore = Depends(get_store)):
    """Instances of the class or of any of its descendants."""
    cards = ClassHierarchyIndex(store).subclass_cards(CardId(class_id))
    return SubclassCards(class_id=class_id, cards=card_refs(cards, CardView(store)))


@router.get("/{class_id}/descendants", response_model=DescendantClasses)
async def get_descendants(class_id: UUID, store: CardStore = Depends(get_store)):
    """The class itself and every class below it."""
    classes = ClassHierarchyIndex(store).descendant_classes(CardId(class_id))
    return DescendantClasses(class_id=class_id, classes=card_refs(classes, CardView(store)))


@router.get("/{class_id}/attributes", response_model=list[AttributeResponse])
async def get_attributes(
    class_id: UUID,
    instance: UUID | None = None,
    class_only: bool = False,
    store: CardStore = Depends(get_store),
):
    engine = AttributeResolutionEngine(store)
    if class_only:
        attributes = engine.attributes_for_class_only(CardId(class_id))
    else:
        instance_id = CardId(instance) if instance is not None else None
        attributes = engine.attributes_for(CardId(class_id), instance_id)
    return [attribute_response(a) for a in attributes]
