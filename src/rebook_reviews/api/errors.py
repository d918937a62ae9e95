"""
rebook_reviews.api.errors

Error kinds and their HTTP rendering.

Responsibilities:
- Define the closed set of error kinds the API can return.
- Map each kind to exactly one HTTP status code.
- Render `ApiError` and request validation failures as `ErrorEnvelope` bodies.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from rebook_reviews.api.schemas import ErrorDetail, ErrorEnvelope
from rebook_reviews.observability.logging import get_logger
from rebook_reviews.services.exceptions import ReviewOwnershipError

log = get_logger(__name__)


class ErrorKind(enum.StrEnum):
    bad_request = "BAD_REQUEST"
    unauthorized = "UNAUTHORIZED"
    forbidden = "FORBIDDEN"
    internal = "INTERNAL"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.bad_request: HTTP_400_BAD_REQUEST,
    ErrorKind.unauthorized: HTTP_401_UNAUTHORIZED,
    ErrorKind.forbidden: HTTP_403_FORBIDDEN,
    ErrorKind.internal: HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(Exception):
    """
    A request failure of a known kind.

    `message` is the client-facing summary; `detail` is what ends up in the
    envelope's `error.message` (defaults to `message`).
    """

    def __init__(self, kind: ErrorKind, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail if detail is not None else message

    def to_envelope(self) -> ErrorEnvelope:
        status_code = self.kind.status_code
        return ErrorEnvelope(
            status_code=status_code,
            message=self.message,
            error=ErrorDetail(kind=self.kind.value, status=status_code, message=self.detail),
        )


@contextmanager
def store_errors(failure_message: str, **log_fields: object) -> Iterator[None]:
    """
    Translate failures raised by a review store call into `ApiError`.

    Ownership violations become FORBIDDEN; anything else is logged with its
    traceback and becomes INTERNAL carrying the raw exception text.
    """
    try:
        yield
    except ApiError:
        raise
    except ReviewOwnershipError as e:
        log.warning("review_ownership_denied", reason=str(e), **log_fields)
        raise ApiError(ErrorKind.forbidden, str(e)) from e
    except Exception as e:
        log.exception("review_store_failed", failure=failure_message, **log_fields)
        raise ApiError(ErrorKind.internal, failure_message, detail=str(e)) from e


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    envelope = exc.to_envelope()
    return JSONResponse(
        status_code=envelope.status_code,
        content=envelope.model_dump(mode="json", by_alias=True),
    )


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    error = ApiError(ErrorKind.bad_request, "Invalid request", detail=problems or "Invalid request")
    return await _api_error_handler(request, error)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, _validation_error_handler  # type: ignore[arg-type]
    )


# --- Module Notes -----------------------------------------------------------
# Routers never build error responses themselves: they raise `ApiError` (directly or
# via `store_errors`) and the handlers registered here render the envelope.
