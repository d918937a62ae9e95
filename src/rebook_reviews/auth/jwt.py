"""
rebook_reviews.auth.jwt

JWT validation helpers.

Responsibilities:
- Decode and validate JWTs with strict claim requirements (iss/aud/exp/sub).
- Classify failures so the API layer can tell expired and unsupported tokens
  apart from generally invalid ones.
- Provide the `TokenValidator` seam the request gate depends on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import jwt
from jwt import ExpiredSignatureError, InvalidAlgorithmError, InvalidTokenError

from rebook_reviews.auth.models import UserIdentity
from rebook_reviews.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class JwtValidationError(Exception):
    pass


class TokenExpiredError(JwtValidationError):
    pass


class UnsupportedTokenError(JwtValidationError):
    """Token uses an algorithm (or no algorithm) this service does not accept."""


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iss", "aud", "sub"],
            },
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError(str(e)) from e
    except InvalidAlgorithmError as e:
        raise UnsupportedTokenError(str(e)) from e
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


class TokenValidator(Protocol):
    def validate(self, token: str) -> UserIdentity: ...


class JwtTokenValidator:
    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    def validate(self, token: str) -> UserIdentity:
        if not token:
            raise JwtValidationError("empty token")

        payload = decode_and_validate(cfg=self._cfg, token=token)

        member_id = payload.get("sub")
        if not isinstance(member_id, str) or not member_id:
            raise JwtValidationError("invalid token subject")
        email = payload.get("email")
        role = payload.get("role") or "USER"
        return UserIdentity(
            member_id=member_id,
            email=str(email) if email is not None else None,
            role=str(role),
        )


# --- Module Notes -----------------------------------------------------------
# Token issuing lives in the account service. Tests mint their own tokens with PyJWT.
