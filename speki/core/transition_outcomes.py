"""Transition Outcomes — uniform result dicts for every transition.

Invariants:
    - Every transition returns exactly one of: ok, rejected, cancelled
    - rejected carries an error_code; cancelled never does
    - ok carries changed=False when nothing was written to the current card

Design Decisions:
    - Return dicts (not exceptions): the front-end renders the message as a notice
      and keeps the session going, so the error path has the same shape as success
"""

from speki.core.card_types import Card
from speki.core.domain_types import OutcomeStatus


def ok(card: Card, message: str, changed: bool = True, **fields: object) -> dict:
    return {
        "status": OutcomeStatus.OK.value,
        "card_id": str(card.id),
        "card_type": card.kind.value,
        "changed": changed,
        "message": message,
        **fields,
    }


def rejected(code: str, message: str) -> dict:
    return {
        "status": OutcomeStatus.REJECTED.value,
        "error_code": code,
        "message": message,
    }


def cancelled(message: str = "Cancelled.") -> dict:
    return {
        "status": OutcomeStatus.CANCELLED.value,
        "message": message,
    }

