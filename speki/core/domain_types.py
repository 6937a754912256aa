"""Domain Types — identity types and closed enums shared across the codebase.

Invariants:
    - CardId and AttributeId wrap UUIDs — never use bare UUID in domain logic
    - CardKind has exactly one member per CardType variant
    - All valid transitions and prompt slots encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CardId = NewType("CardId", UUID)
AttributeId = NewType("AttributeId", UUID)
Category = NewType("Category", str)

DEFAULT_CATEGORY = Category("default")


# ─── Enums ───────────────────────────────────────────────────────

class CardKind(str, Enum):
    """Tag of the CardType variant a card currently holds."""
    NORMAL = "normal"
    UNFINISHED = "unfinished"
    INSTANCE = "instance"
    CLASS = "class"
    ATTRIBUTE = "attribute"
    STATEMENT = "statement"
    EVENT = "event"


class TransitionKind(str, Enum):
    """Every user-initiated operation the transition controller accepts."""
    INTO_INSTANCE = "into_instance"
    INTO_CLASS = "into_class"
    INTO_STATEMENT = "into_statement"
    INTO_EVENT = "into_event"
    INTO_ATTRIBUTE = "into_attribute"
    ATTRIBUTE_FROM_DEPENDENCY = "attribute_from_dependency"
    SET_PARENT_CLASS = "set_parent_class"
    NEW_ATTRIBUTE_PATTERN = "new_attribute_pattern"
    FINISH_UNFINISHED = "finish_unfinished"
    CHANGE_CLASS = "change_class"
    NEW_CLASS = "new_class"
    FILL_ATTRIBUTE = "fill_attribute"
    SET_BACK_REFERENCE = "set_back_reference"


class PromptSlot(str, Enum):
    """Named inputs a transition may ask the user for."""
    TARGET_CLASS = "target_class"
    INSTANCE = "instance"
    ATTRIBUTE = "attribute"
    ANSWER_CARD = "answer_card"
    ANSWER_TEXT = "answer_text"
    NAME = "name"
    PATTERN = "pattern"
    BACK_TYPE = "back_type"
    PARENT_CLASS = "parent_class"
    BACK_REFERENCE = "back_reference"


class OutcomeStatus(str, Enum):
    """Result status of a transition — rejections and cancellations are not exceptions."""
    OK = "ok"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
