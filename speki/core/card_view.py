"""Card View — rendered front/back text and display names per variant.

Invariants:
    - All functions are PURE: names of referenced cards are resolved by the caller
    - An Attribute card's front is its pattern with "{}" replaced by the instance name
    - Every variant renders a front; only Normal, Class and Attribute render a back

Design Decisions:
    - Resolution callbacks instead of store access: keeps rendering testable without fixtures
"""

from collections.abc import Callable
from typing import assert_never

from speki.core.card_types import (
    AttributeCard, BackSide, CardBack, CardType, ClassCard, EventCard,
    InstanceCard, NormalCard, StatementCard, TextBack, UnfinishedCard, kind_of,
)
from speki.core.domain_types import CardId

PLACEHOLDER = "{}"


def render_question(pattern: str, instance_name: str) -> str:
    """Fill an attribute pattern with the instance it is asked about."""
    return pattern.replace(PLACEHOLDER, instance_name)


def front_text(
    card_type: CardType, attribute_question: Callable[[AttributeCard], str],
) -> str:
    """Front of a card. Attribute fronts are delegated to attribute_question."""
    match card_type:
        case NormalCard(front=front) | UnfinishedCard(front=front):
            return front
        case StatementCard(front=front) | EventCard(front=front):
            return front
        case InstanceCard(name=name) | ClassCard(name=name):
            return name
        case AttributeCard():
            return attribute_question(card_type)
        case _:
            assert_never(card_type)


def back_text(back: BackSide | None, card_front: Callable[[CardId], str]) -> str:
    """Back of a card; card references render as the referenced card's front."""
    match back:
        case None:
            return ""
        case TextBack(text=text):
            return text
        case CardBack(card_id=card_id):
            return card_front(card_id)
        case _:
            assert_never(back)


def type_name(card_type: CardType) -> str:
    return kind_of(card_type).value
