"""Card type model tests — pure tests for variant helpers.

Tests cover:
    - kind_of maps every variant to its CardKind
    - back_of / with_back per variant (Unfinished gains an answer → Normal)
    - draft_card: blank front, blank back, full card
    - Card.with_type keeps id and category
"""

import uuid

import pytest

from speki.core.card_types import (
    AttributeCard, Card, CardBack, ClassCard, EventCard, InstanceCard, NormalCard,
    StatementCard, TextBack, UnfinishedCard, back_of, draft_card, kind_of, with_back,
)
from speki.core.domain_types import AttributeId, CardId, CardKind, Category

_ID = CardId(uuid.uuid4())
_OTHER = CardId(uuid.uuid4())
_ATTR = AttributeId(uuid.uuid4())


@pytest.mark.parametrize("card_type, kind", [
    (NormalCard("f", TextBack("b")), CardKind.NORMAL),
    (UnfinishedCard("f"), CardKind.UNFINISHED),
    (InstanceCard("France", _OTHER), CardKind.INSTANCE),
    (ClassCard("Country", TextBack("")), CardKind.CLASS),
    (AttributeCard(_ATTR, TextBack("Paris"), _OTHER), CardKind.ATTRIBUTE),
    (StatementCard("s"), CardKind.STATEMENT),
    (EventCard("e"), CardKind.EVENT),
])
def test_kind_of_every_variant(card_type, kind):
    assert kind_of(card_type) is kind


# --- back_of / with_back ------------------------------------------------------

def test_back_of_variants_with_answer():
    back = TextBack("b")
    assert back_of(NormalCard("f", back)) == back
    assert back_of(ClassCard("C", back)) == back
    assert back_of(AttributeCard(_ATTR, back, _OTHER)) == back


def test_back_of_variants_without_answer():
    assert back_of(UnfinishedCard("f")) is None
    assert back_of(InstanceCard("x", _OTHER)) is None
    assert back_of(StatementCard("s")) is None
    assert back_of(EventCard("e")) is None


def test_with_back_turns_unfinished_into_normal():
    result = with_back(UnfinishedCard("What is 2+2?"), TextBack("4"))
    assert result == NormalCard("What is 2+2?", TextBack("4"))


def test_with_back_replaces_class_answer_keeping_parent():
    klass = ClassCard("City", TextBack(""), parent_class=_OTHER)
    result = with_back(klass, CardBack(_ID))
    assert result == ClassCard("City", CardBack(_ID), parent_class=_OTHER)


def test_with_back_returns_none_for_instance():
    assert with_back(InstanceCard("x", _OTHER), TextBack("b")) is None


# --- draft_card ---------------------------------------------------------------

def test_draft_card_blank_front_is_nothing():
    assert draft_card("   ", "answer") is None


def test_draft_card_blank_back_is_unfinished():
    assert draft_card(" Question ", "  ") == UnfinishedCard("Question")


def test_draft_card_full_is_normal():
    assert draft_card("Q", "A") == NormalCard("Q", TextBack("A"))


# --- Card ---------------------------------------------------------------------

def test_with_type_keeps_identity_and_category():
    card = Card(_ID, NormalCard("f", TextBack("b")), Category("geo"))
    retyped = card.with_type(StatementCard("f"))
    assert retyped.id == _ID
    assert retyped.category == "geo"
    assert retyped.kind is CardKind.STATEMENT
    assert card.kind is CardKind.NORMAL
