"""
rebook_reviews.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Parse the `Authorization` header (strict `Bearer ` prefix).
- Convert a bearer token into a typed `UserIdentity` via the app's `TokenValidator`.
- Classify validation failures into BAD_REQUEST / UNAUTHORIZED `ApiError`s.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from rebook_reviews.api.errors import ApiError, ErrorKind
from rebook_reviews.auth.jwt import (
    JwtValidationError,
    TokenExpiredError,
    TokenValidator,
    UnsupportedTokenError,
)
from rebook_reviews.auth.models import UserIdentity
from rebook_reviews.observability.logging import get_logger

log = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def authenticate(header_value: str | None, validator: TokenValidator) -> UserIdentity:
    # Header shape is checked before the validator ever sees the token.
    if header_value is None or not header_value.startswith(BEARER_PREFIX):
        log.warning("auth_rejected", reason="malformed_header")
        raise ApiError(ErrorKind.bad_request, "Authorization header is missing or malformed")

    token = header_value[len(BEARER_PREFIX) :]
    try:
        return validator.validate(token)
    except TokenExpiredError as e:
        log.warning("auth_rejected", reason="token_expired")
        raise ApiError(ErrorKind.unauthorized, "Token has expired") from e
    except UnsupportedTokenError as e:
        log.warning("auth_rejected", reason="unsupported_token", error=str(e))
        raise ApiError(ErrorKind.unauthorized, "Unsupported token format") from e
    except JwtValidationError as e:
        log.warning("auth_rejected", reason="invalid_token", error=str(e))
        raise ApiError(ErrorKind.unauthorized, "Token is invalid or expired") from e


def token_validator_from_app(request: Request) -> TokenValidator:
    # The validator is created on app startup in `rebook_reviews.api.app.create_app`.
    return request.app.state.token_validator  # type: ignore[no-any-return]


def get_identity(
    authorization: str | None = Header(default=None),
    validator: TokenValidator = Depends(token_validator_from_app),
) -> UserIdentity:
    return authenticate(authorization, validator)


# --- Module Notes -----------------------------------------------------------
# Only the review mutation endpoints depend on `get_identity`; listing is public.
