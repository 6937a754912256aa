"""Service test fixtures — a small geography world and scripted answers.

Invariants:
    - Every test gets a fresh InMemoryCardStore (root conftest `store`)
    - `answers(...)` builds a ScriptedPrompter; omitted slots behave as declined

World:
    Place <- City <- Capital        (class hierarchy, child <- parent)
    Country                         (root class)
    Paris: Capital, Lyon: City, France: Country
    "capital of {}" declared on Capital, back_type = City
    "population of {}" declared on Country, free text
"""

from types import SimpleNamespace

import pytest

from speki.core.domain_types import PromptSlot
from speki.infrastructure.scripted_prompter import ScriptedPrompter


@pytest.fixture
def geo(make):
    place = make.klass("Place")
    city = make.klass("City", parent=place)
    capital = make.klass("Capital", parent=city)
    country = make.klass("Country")
    return SimpleNamespace(
        place=place,
        city=city,
        capital=capital,
        country=country,
        paris=make.instance("Paris", capital),
        lyon=make.instance("Lyon", city),
        france=make.instance("France", country),
        capital_of=make.pattern("capital of {}", capital, back_type=city),
        population_of=make.pattern("population of {}", country),
    )


@pytest.fixture
def answers():
    def build(**slots) -> ScriptedPrompter:
        return ScriptedPrompter({PromptSlot(k): v for k, v in slots.items()})
    return build
