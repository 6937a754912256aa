"""Card type model (shell) tests — into_type and rendered card text."""

import uuid

import pytest

from speki.core.card_types import AttributeCard, CardBack, StatementCard, TextBack
from speki.core.domain_types import CardId
from speki.core.errors import ReferenceNotFoundError
from speki.services.card_type_model import CardView, into_type


def test_into_type_replaces_payload(store, make):
    card_id = make.normal("Q")
    card = into_type(store, card_id, StatementCard("Q"))
    assert card.id == card_id
    assert card.card_type == StatementCard("Q")


def test_into_type_unknown_card_raises(store):
    with pytest.raises(ReferenceNotFoundError):
        into_type(store, CardId(uuid.uuid4()), StatementCard("Q"))


def test_attribute_card_front_uses_pattern(store, geo, make):
    card_id = make.attribute_card(geo.population_of, geo.france, TextBack("68M"))
    view = CardView(store)
    assert view.front_of(card_id) == "population of France"
    assert view.back(store.load(card_id)) == "68M"


def test_card_reference_back_renders_referenced_front(store, geo, make):
    card_id = make.attribute_card(geo.capital_of, geo.france, CardBack(geo.paris))
    assert CardView(store).back(store.load(card_id)) == "Paris"


def test_self_referencing_attribute_renders_id(store, geo, make):
    card_id = make.attribute_card(geo.population_of, geo.france, TextBack("x"))
    store.mutate_type(
        card_id, AttributeCard(geo.population_of, TextBack("x"), instance=card_id),
    )
    assert CardView(store).front_of(card_id) == f"population of {card_id}"


def test_describe(store, make):
    card_id = make.unfinished("Q")
    described = CardView(store).describe(store.load(card_id))
    assert described == {
        "id": str(card_id),
        "kind": "unfinished",
        "type_name": "unfinished",
        "category": "default",
        "front": "Q",
        "back": "",
    }
