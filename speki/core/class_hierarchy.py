"""Class Hierarchy — ancestor chains, descendant closures and subclass membership.

Invariants:
    - All functions are PURE: they operate on the class/card snapshot handed in
    - Every traversal tracks visited ids and stops on repetition — cyclic
      parent_class chains terminate
    - ancestor_chain starts with the class itself; descendant_classes includes it
    - Each qualifying id appears exactly once; no other ordering guarantee

Design Decisions:
    - Children index built per query from the snapshot: the store has no
      "children of" query and parent pointers are the only stored direction
    - Arena lookups by id instead of live back-references between cards
"""

from collections import deque
from collections.abc import Iterable, Mapping

from speki.core.card_types import Card, ClassCard, InstanceCard
from speki.core.domain_types import CardId


def index_classes(classes: Iterable[Card]) -> dict[CardId, ClassCard]:
    """Arena of class payloads keyed by card id. Non-class cards are skipped."""
    return {
        card.id: card.card_type
        for card in classes
        if isinstance(card.card_type, ClassCard)
    }


def build_children_index(
    classes: Mapping[CardId, ClassCard],
) -> dict[CardId, list[CardId]]:
    """Invert parent_class pointers. Self-parenting entries are ignored."""
    children: dict[CardId, list[CardId]] = {}
    for class_id, payload in classes.items():
        parent = payload.parent_class
        if parent is None or parent == class_id:
            continue
        children.setdefault(parent, []).append(class_id)
    return children


def ancestor_chain(
    class_id: CardId, classes: Mapping[CardId, ClassCard],
) -> list[CardId]:
    """class_id followed by its parent, grandparent, ... until a root or a repeat.

    A parent id that is not in the class arena (dangling, or no longer a
    Class card) ends the chain and is not part of it.
    """
    chain: list[CardId] = [class_id]
    seen: set[CardId] = {class_id}
    payload = classes.get(class_id)
    current = payload.parent_class if payload else None
    while current is not None and current not in seen and current in classes:
        chain.append(current)
        seen.add(current)
        current = classes[current].parent_class
    return chain


def descendant_classes(
    class_id: CardId, children: Mapping[CardId, list[CardId]],
) -> list[CardId]:
    """class_id plus every class reachable through the children index (BFS)."""
    found: list[CardId] = [class_id]
    seen: set[CardId] = {class_id}
    queue: deque[CardId] = deque([class_id])
    while queue:
        for child in children.get(queue.popleft(), ()):
            if child not in seen:
                seen.add(child)
                found.append(child)
                queue.append(child)
    return found


def subclass_cards(
    class_id: CardId,
    classes: Mapping[CardId, ClassCard],
    cards: Iterable[Card],
) -> list[CardId]:
    """Every Instance whose class lies in class_id's descendant closure."""
    members = set(descendant_classes(class_id, build_children_index(classes)))
    return [
        card.id
        for card in cards
        if isinstance(card.card_type, InstanceCard)
        and card.card_type.class_id in members
    ]

