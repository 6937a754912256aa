"""Card Presenters — core dataclasses → response schemas.

Invariants:
    - Every CardType variant maps to exactly one payload schema (assert_never on the rest)
    - Rendered front/back come from CardView, never recomputed here
"""

from collections.abc import Iterable
from typing import assert_never

from speki.core.card_types import (
    Attribute, AttributeCard, BackSide, Card, CardBack, CardType, ClassCard,
    EventCard, InstanceCard, NormalCard, StatementCard, TextBack, UnfinishedCard,
)
from speki.core.domain_types import CardId
from speki.schemas.card import (
    AttributePayload, AttributeResponse, CardBackModel, CardRef, CardResponse,
    ClassPayload, EventPayload, InstancePayload, NormalPayload, StatementPayload,
    TextBackModel, UnfinishedPayload,
)
from speki.services.card_type_model import CardView


def card_response(card: Card, view: CardView) -> CardResponse:
    described = view.describe(card)
    return CardResponse(**described, payload=_payload(card.card_type))


def card_refs(card_ids: Iterable[CardId], view: CardView) -> list[CardRef]:
    return [CardRef(id=card_id, front=view.front_of(card_id)) for card_id in card_ids]


def attribute_response(attribute: Attribute) -> AttributeResponse:
    return AttributeResponse(
        id=attribute.id, pattern=attribute.pattern,
        class_id=attribute.class_id, back_type=attribute.back_type,
    )


def _back(back: BackSide) -> TextBackModel | CardBackModel:
    match back:
        case TextBack(text=text):
            return TextBackModel(text=text)
        case CardBack(card_id=card_id):
            return CardBackModel(card_id=card_id)
        case _:
            assert_never(back)


def _payload(card_type: CardType):
    match card_type:
        case NormalCard(front=front, back=back):
            return NormalPayload(front=front, back=_back(back))
        case UnfinishedCard(front=front):
            return UnfinishedPayload(front=front)
        case InstanceCard(name=name, class_id=class_id):
            return InstancePayload(name=name, class_id=class_id)
        case ClassCard():
            return ClassPayload(
                name=card_type.name, back=_back(card_type.back),
                parent_class=card_type.parent_class, is_event=card_type.is_event,
            )
        case AttributeCard(attribute=attribute, back=back, instance=instance):
            return AttributePayload(attribute=attribute, back=_back(back), instance=instance)
        case StatementCard(front=front):
            return StatementPayload(front=front)
        case EventCard(front=front):
            return EventPayload(front=front)
        case _:
            assert_never(card_type)
