"""Error Handlers — map speki exceptions to the JSON error envelope.

Invariants:
    - SpekiError → its own http_status and to_response() body; the log line carries
      the card and transition from the error context when a transition raised it
    - ReferenceNotFoundError also logs which kind of reference was missing
    - RequestValidationError → 400 VALIDATION_ERROR with one entry per bad field
    - Any other exception → 500 INTERNAL_ERROR, no internal details in the body

Design Decisions:
    - Rejected/cancelled transitions never reach here: they are 200 outcomes
    - Kept out of main.py so the app module only wires things together
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from speki.core.errors import (
    CardKindMismatchError, ErrorSeverity, ReferenceNotFoundError, SpekiError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SpekiError, _speki_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)


async def _speki_error(request: Request, exc: SpekiError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"{exc.code}: {exc.message}", extra=_error_extra(request, exc))
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [_field_error(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request body: {', '.join(f['field'] for f in fields)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data", "validation",
            ErrorSeverity.ERROR, details=fields,
        ),
    )


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred", "internal",
            ErrorSeverity.CRITICAL,
        ),
    )


def _error_extra(request: Request, exc: SpekiError) -> dict:
    extra = {
        "error_code": exc.code,
        "path": request.url.path,
        "card_id": exc.context.card_id,
        "transition": exc.context.transition,
    }
    match exc:
        case ReferenceNotFoundError():
            extra["resource"] = f"{exc.resource_type}:{exc.resource_id}"
        case CardKindMismatchError():
            extra["resource"] = f"expected {exc.expected}, got {exc.actual}"
    return extra


def _field_error(error: dict) -> dict:
    return {
        "field": ".".join(str(loc) for loc in error["loc"]),
        "message": error["msg"],
        "type": error["type"],
    }


def _envelope(
    code: str, message: str, category: str, severity: ErrorSeverity, **fields: object,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category,
            "severity": severity.value,
            **fields,
        },
    }
