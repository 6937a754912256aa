"""Attribute Resolution Engine — store-backed pattern lookup, creation and answer narrowing.

Invariants:
    - attributes_for(C) = patterns declared on C or any ancestor, deduplicated
    - attributes_for_class_only(C) = patterns declared exactly on C
    - create() succeeds once the class (and back_type, if given) resolve to Class cards
    - resolve_back_candidates: back_type unset => unrestricted; set => subclass_cards(back_type), no free text
    - An empty pattern list is returned as-is; callers surface it as a notice

Design Decisions:
    - Hierarchy walking delegated to ClassHierarchyIndex; dedup/narrowing to core/attribute_resolution
"""

import logging

from speki.core.attribute_resolution import (
    BackCandidates, back_candidates, check_answer, collect_patterns,
)
from speki.core.card_types import Attribute, BackSide
from speki.core.card_view import render_question
from speki.core.domain_types import AttributeId, CardId
from speki.core.repository_protocols import CardStore
from speki.services.card_type_model import CardView
from speki.services.class_hierarchy_index import ClassHierarchyIndex

logger = logging.getLogger(__name__)


class AttributeResolutionEngine:
    """Enumerates usable patterns and narrows legal answers."""

    def __init__(self, store: CardStore, hierarchy: ClassHierarchyIndex | None = None):
        self._store = store
        self._hierarchy = hierarchy or ClassHierarchyIndex(store)

    def attributes_for(
        self, class_id: CardId, instance_id: CardId | None = None,
    ) -> list[Attribute]:
        """Patterns usable for an instance of class_id (inherited included)."""
        if instance_id is not None:
            self._hierarchy.require_instance(instance_id)
        chain = self._hierarchy.ancestor_chain(class_id)
        declared = {c: self._store.attributes_of_class(c) for c in chain}
        return collect_patterns(chain, declared)

    def attributes_for_class_only(self, class_id: CardId) -> list[Attribute]:
        self._hierarchy.require_class(class_id)
        return list(self._store.attributes_of_class(class_id))

    def create(
        self, pattern: str, class_id: CardId, back_type: CardId | None = None,
    ) -> AttributeId:
        """Allocate a new pattern on class_id. Persists independently of any attribute card."""
        self._hierarchy.require_class(class_id)
        if back_type is not None:
            self._hierarchy.require_class(back_type)
        attribute_id = self._store.create_attribute(pattern, class_id, back_type)
        logger.info(
            f"Created attribute pattern '{pattern}'",
            extra={"attribute_id": str(attribute_id), "class_id": str(class_id)},
        )
        return attribute_id

    def resolve_back_candidates(self, attribute_id: AttributeId) -> BackCandidates:
        return self._candidates(self._store.load_attribute(attribute_id))

    def check_answer(self, attribute_id: AttributeId, back: BackSide) -> dict | None:
        """Rejection dict if back is not a legal answer for the pattern, else None."""
        attribute = self._store.load_attribute(attribute_id)
        return check_answer(attribute, self._candidates(attribute), back)

    def question_for(self, attribute_id: AttributeId, instance_id: CardId) -> str:
        attribute = self._store.load_attribute(attribute_id)
        return render_question(attribute.pattern, CardView(self._store).front_of(instance_id))

    def _candidates(self, attribute: Attribute) -> BackCandidates:
        if attribute.back_type is None:
            return back_candidates(attribute, ())
        return back_candidates(attribute, self._hierarchy.subclass_cards(attribute.back_type))
