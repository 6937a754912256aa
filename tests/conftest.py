"""Root conftest — shared fixtures: an empty in-memory store and a card factory."""

import pytest

from speki.core.card_types import (
    AttributeCard, ClassCard, EventCard, InstanceCard, NormalCard,
    StatementCard, TextBack, UnfinishedCard,
)
from speki.core.domain_types import DEFAULT_CATEGORY
from speki.infrastructure.memory_store import InMemoryCardStore


class CardFactory:
    """Adds cards of every variant to a store and returns their ids."""

    def __init__(self, store: InMemoryCardStore):
        self.store = store

    def normal(self, front, back="answer", category=DEFAULT_CATEGORY):
        return self.store.create_card(NormalCard(front, TextBack(back)), category)

    def unfinished(self, front, category=DEFAULT_CATEGORY):
        return self.store.create_card(UnfinishedCard(front), category)

    def statement(self, front):
        return self.store.create_card(StatementCard(front), DEFAULT_CATEGORY)

    def event(self, front):
        return self.store.create_card(EventCard(front), DEFAULT_CATEGORY)

    def klass(self, name, parent=None, back=""):
        return self.store.create_card(
            ClassCard(name=name, back=TextBack(back), parent_class=parent),
            DEFAULT_CATEGORY,
        )

    def instance(self, name, class_id):
        return self.store.create_card(InstanceCard(name, class_id), DEFAULT_CATEGORY)

    def pattern(self, text, class_id, back_type=None):
        return self.store.create_attribute(text, class_id, back_type)

    def attribute_card(self, attribute_id, instance_id, back):
        return self.store.create_card(
            AttributeCard(attribute=attribute_id, back=back, instance=instance_id),
            DEFAULT_CATEGORY,
        )


@pytest.fixture
def store():
    return InMemoryCardStore()


@pytest.fixture
def make(store):
    return CardFactory(store)
