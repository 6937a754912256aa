"""Card Type Model — the closed set of card variants and their payloads.

Invariants:
    - CardType is a closed union: every consumer matches exhaustively (assert_never)
    - Card.id and Card.category never change; only card_type is replaced
    - An Instance's class_id references a Class card (enforced by the transition layer)
    - A Class's parent_class never equals its own id (enforced by the transition layer)

Design Decisions:
    - Frozen dataclasses over dicts: variants are values, retyping builds a new Card
    - No validation here — invariants are checked once, at the moment of user intent
"""

from dataclasses import dataclass, replace
from typing import assert_never

from speki.core.domain_types import AttributeId, CardId, CardKind, Category


# ─── Back Side ───────────────────────────────────────────────────

@dataclass(frozen=True)
class TextBack:
    """Free-text answer."""
    text: str


@dataclass(frozen=True)
class CardBack:
    """Answer that references another card."""
    card_id: CardId


BackSide = TextBack | CardBack


# ─── Variants ────────────────────────────────────────────────────

@dataclass(frozen=True)
class NormalCard:
    front: str
    back: BackSide


@dataclass(frozen=True)
class UnfinishedCard:
    front: str


@dataclass(frozen=True)
class InstanceCard:
    name: str
    class_id: CardId


@dataclass(frozen=True)
class ClassCard:
    name: str
    back: BackSide
    parent_class: CardId | None = None
    is_event: bool = False


@dataclass(frozen=True)
class AttributeCard:
    attribute: AttributeId
    back: BackSide
    instance: CardId


@dataclass(frozen=True)
class StatementCard:
    front: str


@dataclass(frozen=True)
class EventCard:
    front: str


CardType = (
    NormalCard | UnfinishedCard | InstanceCard | ClassCard
    | AttributeCard | StatementCard | EventCard
)


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Card:
    """A learning item: stable identity plus its current typed payload."""
    id: CardId
    card_type: CardType
    category: Category

    @property
    def kind(self) -> CardKind:
        return kind_of(self.card_type)

    def with_type(self, new_type: CardType) -> "Card":
        """Same id and category, new payload."""
        return replace(self, card_type=new_type)


@dataclass(frozen=True)
class Attribute:
    """A reusable question pattern declared on a class.

    If back_type is set, any card answer must be an Instance of that class
    or one of its subclasses, and free text is not accepted.
    """
    id: AttributeId
    pattern: str
    class_id: CardId
    back_type: CardId | None = None


# ─── Variant helpers ─────────────────────────────────────────────

def kind_of(card_type: CardType) -> CardKind:
    """Map a payload to its CardKind tag."""
    match card_type:
        case NormalCard():
            return CardKind.NORMAL
        case UnfinishedCard():
            return CardKind.UNFINISHED
        case InstanceCard():
            return CardKind.INSTANCE
        case ClassCard():
            return CardKind.CLASS
        case AttributeCard():
            return CardKind.ATTRIBUTE
        case StatementCard():
            return CardKind.STATEMENT
        case EventCard():
            return CardKind.EVENT
        case _:
            assert_never(card_type)


def back_of(card_type: CardType) -> BackSide | None:
    """The answer payload, for variants that carry one."""
    match card_type:
        case NormalCard(back=back) | ClassCard(back=back) | AttributeCard(back=back):
            return back
        case UnfinishedCard() | InstanceCard() | StatementCard() | EventCard():
            return None
        case _:
            assert_never(card_type)


def with_back(card_type: CardType, back: BackSide) -> CardType | None:
    """Replace the answer payload. None if the variant cannot hold an answer.

    An Unfinished card given an answer becomes a Normal card.
    """
    match card_type:
        case NormalCard() | ClassCard() | AttributeCard():
            return replace(card_type, back=back)
        case UnfinishedCard(front=front):
            return NormalCard(front=front, back=back)
        case InstanceCard() | StatementCard() | EventCard():
            return None
        case _:
            assert_never(card_type)


def draft_card(front: str, back: str) -> CardType | None:
    """Payload for a newly added card. Blank front: nothing to add. Blank back: unfinished."""
    front, back = front.strip(), back.strip()
    if not front:
        return None
    if not back:
        return UnfinishedCard(front=front)
    return NormalCard(front=front, back=TextBack(back))
