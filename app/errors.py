"""Error taxonomy and HTTP error rendering.

Services raise :class:`ContactError` tagged with an :class:`ErrorKind`.
Handlers registered by :func:`register_error_handlers` are the only place
where failures are translated into HTTP responses; every response shares
the :class:`~app.schemas.ErrorResponse` shape and carries a tracking code
that also appears in the server log.
"""

import logging
import time
from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .schemas import FIELD_MESSAGES, ErrorResponse

logger = logging.getLogger(__name__)

HTTP_ERROR_CODE_PREFIX = "HTTP-"

_LOCATIONS = ("body", "query", "path", "header", "cookie")

# pydantic error types grouped by the constraint they report
_REASON_GROUPS = {
    "missing": "required",
    "blank": "required",
    "string_too_short": "size",
    "string_too_long": "size",
    "value_error": "format",
}


class ErrorKind(Enum):
    """Failure kinds with their HTTP status, code prefix and title."""

    VALIDATION_FAILED = (400, "VAL-", "Invalid data")
    NOT_FOUND = (404, "NF-", "Resource not found")
    DUPLICATE_EMAIL = (409, "BUSINESS_RULE_VIOLATION-", "Business rule violation")
    INTERNAL = (500, "INT-", "Internal server error")

    def __init__(self, status_code: int, prefix: str, title: str):
        self.status_code = status_code
        self.prefix = prefix
        self.title = title


class ContactError(Exception):
    """
    Failure raised by the contact service.

    Attributes:
        kind (ErrorKind): Category that decides status and code prefix.
        message (str): Client-facing description.
        details (list[str]): Extra hints, written to the log only.
    """

    def __init__(
        self, kind: ErrorKind, message: str, details: Optional[Iterable[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = list(details or [])

    @classmethod
    def not_found(cls, contact_id: Any) -> "ContactError":
        return cls(
            ErrorKind.NOT_FOUND,
            f"Contact with id {contact_id} not found",
            [
                "Check that the identifier is correct",
                "List the available contacts with GET /api/contatos",
            ],
        )

    @classmethod
    def duplicate_email(cls, email: str) -> "ContactError":
        return cls(ErrorKind.DUPLICATE_EMAIL, f"Email already registered: {email}")

    @classmethod
    def validation_failed(cls, errors: Iterable[Mapping[str, Any]]) -> "ContactError":
        """
        Build a validation failure from pydantic error dictionaries.

        Args:
            errors: Items as returned by ``ValidationError.errors()``.

        Returns:
            ContactError: Failure whose message lists one
            ``[field: reason]`` entry per violated field.
        """
        details = field_errors(errors)
        return cls(ErrorKind.VALIDATION_FAILED, " ".join(details), details)


def _field_name(loc: Sequence[Any]) -> str:
    parts = [part for part in loc if isinstance(part, str) and part not in _LOCATIONS]
    if parts:
        return ".".join(parts)
    return str(loc[0]) if loc else "request"


def describe_field_error(error: Mapping[str, Any]) -> str:
    """Return ``[field: reason]`` for a single pydantic error."""
    field = _field_name(error.get("loc", ()))
    group = _REASON_GROUPS.get(error.get("type", ""))
    reason = FIELD_MESSAGES.get(field, {}).get(group) or error.get("msg", "is invalid")
    return f"[{field}: {reason}]"


def field_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """
    Format pydantic errors, keeping the first error of each field.

    Order follows the order in which the errors were reported.
    """
    seen = set()
    result = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        if field in seen:
            continue
        seen.add(field)
        result.append(describe_field_error(error))
    return result


def tracking_code() -> str:
    """Six uppercase hex digits derived from the current time in milliseconds."""
    return format(time.time_ns() // 1_000_000, "X")[-6:]


def error_response(
    request: Request,
    status_code: int,
    title: str,
    message: str,
    code: str,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Build the uniform JSON error response."""
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=title,
        message=message,
        path=request.url.path,
        errorCode=code,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=dict(headers) if headers else None,
    )


def render_error(request: Request, exc: Exception) -> JSONResponse:
    """
    Translate any exception into an error response.

    ``ContactError`` keeps its kind and message. Everything else is
    reported as an internal error whose message only carries the code.
    """
    kind = exc.kind if isinstance(exc, ContactError) else ErrorKind.INTERNAL
    code = kind.prefix + tracking_code()

    if kind is ErrorKind.INTERNAL:
        logger.exception("[%s] %s - %s", code, type(exc).__name__, exc, exc_info=exc)
        message = f"An unexpected error occurred. Code: {code}"
    else:
        logger.warning("[%s] %s - %s", code, kind.name, exc.message)
        if exc.details:
            logger.info("[%s] details: %s", code, "; ".join(exc.details))
        message = exc.message

    return error_response(request, kind.status_code, kind.title, message, code)


def render_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render errors raised by the routing layer itself (404, 405, ...)."""
    if exc.status_code == HTTPStatus.NOT_FOUND:
        return render_error(request, ContactError(ErrorKind.NOT_FOUND, str(exc.detail)))

    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = "Error"
    code = HTTP_ERROR_CODE_PREFIX + tracking_code()
    logger.warning("[%s] HTTP %s - %s", code, exc.status_code, exc.detail)
    return error_response(
        request, exc.status_code, title, str(exc.detail), code, headers=exc.headers
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Register the error pipeline on the FastAPI application.

    Args:
        app (FastAPI): Application instance.
    """

    @app.exception_handler(ContactError)
    async def handle_contact_error(request: Request, exc: ContactError):
        return render_error(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return render_error(request, ContactError.validation_failed(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return render_http_exception(request, exc)

    @app.middleware("http")
    async def render_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return render_error(request, exc)
