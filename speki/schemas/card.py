"""Card Schemas — Pydantic models for cards, dependencies and hierarchy responses.

Invariants:
    - CardCreate.front: stripped, non-empty; a blank back makes an Unfinished card
    - CardResponse.payload is discriminated by kind and mirrors the CardType variant
    - DependencyCreate links an existing card (card_id) or creates one (front/back), never both

Design Decisions:
    - Discriminated unions (Field(discriminator=...)) over one flat model: each
      variant's fields are required exactly where the variant has them
    - Conversion from core dataclasses lives in api/routes/card_presenters.py;
      schemas never import services
"""

from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from speki.core.domain_types import CardKind


# --- Back side ----------------------------------------------------------------

class TextBackModel(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class CardBackModel(BaseModel):
    kind: Literal["card"] = "card"
    card_id: UUID


BackModel = Annotated[TextBackModel | CardBackModel, Field(discriminator="kind")]


# --- Variant payloads -----------------------------------------------------------

class NormalPayload(BaseModel):
    kind: Literal["normal"] = "normal"
    front: str
    back: BackModel


class UnfinishedPayload(BaseModel):
    kind: Literal["unfinished"] = "unfinished"
    front: str


class InstancePayload(BaseModel):
    kind: Literal["instance"] = "instance"
    name: str
    class_id: UUID


class ClassPayload(BaseModel):
    kind: Literal["class"] = "class"
    name: str
    back: BackModel
    parent_class: UUID | None = None
    is_event: bool = False


class AttributePayload(BaseModel):
    kind: Literal["attribute"] = "attribute"
    attribute: UUID
    back: BackModel
    instance: UUID


class StatementPayload(BaseModel):
    kind: Literal["statement"] = "statement"
    front: str


class EventPayload(BaseModel):
    kind: Literal["event"] = "event"
    front: str


CardPayload = Annotated[
    NormalPayload | UnfinishedPayload | InstancePayload | ClassPayload
    | AttributePayload | StatementPayload | EventPayload,
    Field(discriminator="kind"),
]


# --- Cards ----------------------------------------------------------------------

class CardCreate(BaseModel):
    """New card from front/back text. category defaults to the configured one."""
    front: str = Field(max_length=10_000)
    back: str = Field("", max_length=10_000)
    category: str | None = Field(None, min_length=1, max_length=200)

    @field_validator("front")
    @classmethod
    def strip_front(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("front cannot be empty or whitespace")
        return v


class CardResponse(BaseModel):
    """A card with its payload and rendered text."""
    id: UUID
    kind: CardKind
    type_name: str
    category: str
    front: str
    back: str
    payload: CardPayload


class CardRef(BaseModel):
    """A card id with its rendered front, for listings."""
    id: UUID
    front: str


# --- Dependencies ---------------------------------------------------------------

class DependencyCreate(BaseModel):
    """Link an existing card, or create a new one from front/back and link it."""
    card_id: UUID | None = None
    front: str | None = Field(None, max_length=10_000)
    back: str = Field("", max_length=10_000)

    @model_validator(mode="after")
    def validate_target(self):
        if self.card_id is None and self.front is None:
            raise ValueError("either card_id or front is required")
        if self.card_id is not None and self.front is not None:
            raise ValueError("card_id and front are mutually exclusive")
        return self


class DependencyResult(BaseModel):
    """Outcome of adding a dependency edge."""
    status: Literal["ok", "cancelled"]
    card_id: UUID | None = None
    created: bool = False
    added: bool = False


class DependencyOverview(BaseModel):
    card_id: UUID
    dependencies: list[CardRef] = []
    dependents: list[CardRef] = []


# --- Hierarchy and attributes ---------------------------------------------------

class AncestorChain(BaseModel):
    """class_id first, then each parent up to the root."""
    class_id: UUID
    ancestors: list[CardRef]


class SubclassCards(BaseModel):
    """Instances of class_id or of any of its descendant classes."""
    class_id: UUID
    cards: list[CardRef]


class DescendantClasses(BaseModel):
    """class_id and every class below it."""
    class_id: UUID
    classes: list[CardRef]


class AttributeResponse(BaseModel):
    id: UUID
    pattern: str
    class_id: UUID
    back_type: UUID | None = None


class BackCandidatesResponse(BaseModel):
    """cards is None when any answer is accepted."""
    attribute_id: UUID
    free_text_allowed: bool
    cards: list[CardRef] | None = None
