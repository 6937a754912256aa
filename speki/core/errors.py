"""Error Hierarchy — typed, categorized exceptions for failures that must propagate.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Only hard failures are exceptions: unknown ids, wrong-variant queries, store write failures
    - User cancellations and rejected transitions are NOT exceptions — see transition_outcomes
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SpekiError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    card_id: str | None = None
    transition: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class SpekiError(Exception):
    """Base exception for all speki errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "card_id": self.context.card_id,
                    "transition": self.context.transition,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class ReferenceNotFoundError(SpekiError):
    """A supplied card or attribute id does not resolve in the store."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class CardKindMismatchError(SpekiError):
    """A query received a card of the wrong variant (e.g. subclass_cards on a non-class)."""
    def __init__(
        self, card_id: str, expected: str, actual: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Card '{card_id}' is a {actual} card, expected {expected}",
            "CARD_KIND_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.expected = expected
        self.actual = actual


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(SpekiError):
    """The external store refused a write. Never retried here."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
