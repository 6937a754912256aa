"""Attribute resolution tests — pattern collection and answer narrowing.

Tests cover:
    - collect_patterns: ancestor order, dedup by id
    - back_candidates: unrestricted vs restricted (possibly empty)
    - check_answer: FREE_TEXT_NOT_ALLOWED, BACK_NOT_IN_CLASS
    - check_patterns_available: NO_PATTERNS
"""

import uuid

from speki.core.attribute_resolution import (
    UNRESTRICTED, back_candidates, check_answer, check_patterns_available,
    collect_patterns,
)
from speki.core.card_types import Attribute, CardBack, TextBack
from speki.core.domain_types import AttributeId, CardId


def _id() -> CardId:
    return CardId(uuid.uuid4())


def _attr(pattern, class_id, back_type=None) -> Attribute:
    return Attribute(AttributeId(uuid.uuid4()), pattern, class_id, back_type)


def test_collect_patterns_follows_chain_order():
    capital, city = _id(), _id()
    mayor = _attr("Mayor of {}", city)
    founded = _attr("When was {} made capital?", capital)
    patterns = collect_patterns([capital, city], {capital: [founded], city: [mayor]})
    assert patterns == [founded, mayor]


def test_collect_patterns_deduplicates_by_id():
    a = _id()
    shared = _attr("p", a)
    assert collect_patterns([a, a], {a: [shared, shared]}) == [shared]


def test_collect_patterns_empty_chain_entries():
    assert collect_patterns([_id()], {}) == []


def test_back_candidates_unrestricted_without_back_type():
    candidates = back_candidates(_attr("p", _id()), [_id()])
    assert candidates is UNRESTRICTED
    assert candidates.free_text_allowed
    assert not candidates.restricted


def test_back_candidates_restricted_may_be_empty():
    candidates = back_candidates(_attr("p", _id(), back_type=_id()), [])
    assert candidates.restricted
    assert candidates.cards == ()
    assert not candidates.free_text_allowed


def test_check_answer_accepts_anything_when_unrestricted():
    attribute = _attr("p", _id())
    assert check_answer(attribute, UNRESTRICTED, TextBack("x")) is None
    assert check_answer(attribute, UNRESTRICTED, CardBack(_id())) is None


def test_check_answer_rejects_free_text_when_restricted():
    member = _id()
    attribute = _attr("Capital of {}", _id(), back_type=_id())
    error = check_answer(attribute, back_candidates(attribute, [member]), TextBack("Paris"))
    assert error["error_code"] == "FREE_TEXT_NOT_ALLOWED"


def test_check_answer_rejects_card_outside_class():
    member, outsider = _id(), _id()
    attribute = _attr("Capital of {}", _id(), back_type=_id())
    candidates = back_candidates(attribute, [member])
    assert check_answer(attribute, candidates, CardBack(member)) is None
    error = check_answer(attribute, candidates, CardBack(outsider))
    assert error["error_code"] == "BACK_NOT_IN_CLASS"


def test_check_patterns_available():
    assert check_patterns_available([_attr("p", _id())], "Country") is None
    error = check_patterns_available([], "Country")
    assert error["error_code"] == "NO_PATTERNS"
    assert "Country" in error["message"]
