"""Class hierarchy tests — pure traversal over class snapshots.

Tests cover:
    - ancestor_chain: starts at the class, walks to the root, stops on cycles
      and on dangling parents
    - descendant_classes / subclass_cards: transitive closure, self included
    - build_children_index ignores self-parenting
"""

import uuid

from speki.core.card_types import Card, ClassCard, InstanceCard, NormalCard, TextBack
from speki.core.class_hierarchy import (
    ancestor_chain, build_children_index, descendant_classes, index_classes,
    subclass_cards,
)
from speki.core.domain_types import DEFAULT_CATEGORY, CardId


def _id() -> CardId:
    return CardId(uuid.uuid4())


def _class(name, parent=None):
    return ClassCard(name=name, back=TextBack(""), parent_class=parent)


# --- Ancestors ----------------------------------------------------------------

def test_ancestor_chain_of_root_is_itself():
    a = _id()
    assert ancestor_chain(a, {a: _class("A")}) == [a]


def test_ancestor_chain_walks_to_root():
    place, city, capital = _id(), _id(), _id()
    classes = {
        place: _class("Place"),
        city: _class("City", place),
        capital: _class("Capital", city),
    }
    assert ancestor_chain(capital, classes) == [capital, city, place]


def test_ancestor_chain_terminates_on_cycle():
    a, b = _id(), _id()
    classes = {a: _class("A", b), b: _class("B", a)}
    assert ancestor_chain(a, classes) == [a, b]


def test_ancestor_chain_self_parent_is_single_entry():
    a = _id()
    assert ancestor_chain(a, {a: _class("A", a)}) == [a]


def test_ancestor_chain_excludes_missing_parent():
    a, gone = _id(), _id()
    assert ancestor_chain(a, {a: _class("A", gone)}) == [a]


def test_ancestor_chain_stops_below_a_non_class_parent():
    place, city, capital = _id(), _id(), _id()
    # place is no longer a class, so it is absent from the arena
    classes = {city: _class("City", place), capital: _class("Capital", city)}
    assert ancestor_chain(capital, classes) == [capital, city]


# --- Descendants --------------------------------------------------------------

def test_children_index_skips_self_parent():
    a, b = _id(), _id()
    children = build_children_index({a: _class("A", a), b: _class("B", a)})
    assert children == {a: [b]}


def test_descendant_classes_is_transitive_and_includes_self():
    place, city, capital, country = _id(), _id(), _id(), _id()
    classes = {
        place: _class("Place"),
        city: _class("City", place),
        capital: _class("Capital", city),
        country: _class("Country"),
    }
    found = descendant_classes(place, build_children_index(classes))
    assert sorted(found) == sorted([place, city, capital])


def test_descendant_classes_terminates_on_cycle():
    a, b = _id(), _id()
    children = build_children_index({a: _class("A", b), b: _class("B", a)})
    assert sorted(descendant_classes(a, children)) == sorted([a, b])


def test_subclass_cards_collects_instances_of_descendants():
    city, capital, country = _id(), _id(), _id()
    classes = {
        city: _class("City"),
        capital: _class("Capital", city),
        country: _class("Country"),
    }
    lyon = Card(_id(), InstanceCard("Lyon", city), DEFAULT_CATEGORY)
    paris = Card(_id(), InstanceCard("Paris", capital), DEFAULT_CATEGORY)
    france = Card(_id(), InstanceCard("France", country), DEFAULT_CATEGORY)
    note = Card(_id(), NormalCard("Q", TextBack("A")), DEFAULT_CATEGORY)

    members = subclass_cards(city, classes, [lyon, paris, france, note])
    assert sorted(members) == sorted([lyon.id, paris.id])


def test_index_classes_skips_non_classes():
    klass = Card(_id(), _class("C"), DEFAULT_CATEGORY)
    note = Card(_id(), NormalCard("Q", TextBack("A")), DEFAULT_CATEGORY)
    assert index_classes([klass, note]) == {klass.id: klass.card_type}


def test_subclass_cards_terminates_on_cycle():
    a, b = _id(), _id()
    classes = {a: _class("A", b), b: _class("B", a)}
    in_a = Card(_id(), InstanceCard("x", a), DEFAULT_CATEGORY)
    in_b = Card(_id(), InstanceCard("y", b), DEFAULT_CATEGORY)
    assert sorted(subclass_cards(a, classes, [in_a, in_b])) == sorted([in_a.id, in_b.id])
