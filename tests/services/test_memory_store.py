"""In-memory store tests — arena semantics behind the CardStore protocol.

Tests cover:
    - Unknown ids raise ReferenceNotFoundError
    - mutate_type keeps id and category; refuses non-payload values (StoreError)
    - add_dependency is idempotent and keeps the dependents cache in step
"""

import uuid

import pytest

from speki.core.card_types import StatementCard
from speki.core.dependency_graph import derive_dependents_index
from speki.core.domain_types import AttributeId, CardId, Category
from speki.core.errors import ReferenceNotFoundError, StoreError


def test_load_unknown_card_raises(store):
    with pytest.raises(ReferenceNotFoundError):
        store.load(CardId(uuid.uuid4()))


def test_load_unknown_attribute_raises(store):
    with pytest.raises(ReferenceNotFoundError):
        store.load_attribute(AttributeId(uuid.uuid4()))


def test_mutate_type_preserves_identity(store, make):
    card_id = make.normal("Q", category=Category("geo"))
    store.mutate_type(card_id, StatementCard("Q"))
    card = store.load(card_id)
    assert card.id == card_id
    assert card.category == "geo"
    assert card.card_type == StatementCard("Q")


def test_mutate_type_refuses_unknown_payload(store, make):
    card_id = make.normal("Q")
    with pytest.raises(StoreError):
        store.mutate_type(card_id, {"front": "Q"})


def test_create_card_refuses_unknown_payload(store):
    with pytest.raises(StoreError):
        store.create_card("not a card", Category("default"))


def test_all_classes_only_returns_classes(store, make):
    klass = make.klass("Country")
    make.normal("Q")
    assert [c.id for c in store.all_classes()] == [klass]


def test_create_attribute_requires_existing_class(store):
    with pytest.raises(ReferenceNotFoundError):
        store.create_attribute("p {}", CardId(uuid.uuid4()), None)


def test_add_dependency_twice_is_same_as_once(store, make):
    a, b = make.normal("A"), make.normal("B")
    store.add_dependency(a, b)
    store.add_dependency(a, b)
    assert store.dependencies_of(b) == [a]
    assert store.cached_dependents_of(a) == [b]


def test_dependents_cache_matches_forward_lists(store, make):
    a, b, c = make.normal("A"), make.normal("B"), make.normal("C")
    store.add_dependency(a, b)
    store.add_dependency(a, c)
    store.add_dependency(c, a)
    store.add_dependency(a, b)
    derived = derive_dependents_index(
        {x: store.dependencies_of(x) for x in (a, b, c)},
    )
    for x in (a, b, c):
        assert set(store.cached_dependents_of(x)) == set(derived.get(x, ()))
