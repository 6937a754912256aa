"""Dependency Graph — pure derivations over dependency edges.

Invariants:
    - Edge (dependency -> dependent): the dependent requires the dependency
    - Cycles and self-edges are tolerated, never rejected
    - The dependents index is derived from the forward lists and nothing else
    - Duplicate edges collapse: derived lists hold each id once, in first-seen order
"""

from collections.abc import Iterable, Mapping, Sequence

from speki.core.card_types import Card, InstanceCard
from speki.core.domain_types import CardId
from speki.core.transition_outcomes import rejected


def derive_dependents_index(
    dependencies: Mapping[CardId, Sequence[CardId]],
) -> dict[CardId, list[CardId]]:
    """Reverse the forward dependency lists."""
    dependents: dict[CardId, list[CardId]] = {}
    for dependent, deps in dependencies.items():
        for dependency in deps:
            bucket = dependents.setdefault(dependency, [])
            if dependent not in bucket:
                bucket.append(dependent)
    return dependents


def instance_dependencies(dependencies: Iterable[Card]) -> list[Card]:
    """Only the dependencies that are Instance cards."""
    return [card for card in dependencies if isinstance(card.card_type, InstanceCard)]


def check_instance_dependency(instances: Sequence[Card]) -> dict | None:
    """An attribute answer card needs at least one Instance among its dependencies."""
    if not instances:
        return rejected(
            "NO_INSTANCE_DEPENDENCY",
            "Card must have an instance as a dependency.",
        )
    return None
