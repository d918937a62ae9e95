"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file, an in-process HTTP
client, seeded members, and a helper for minting bearer tokens.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import jwt
import pytest
import pytest_asyncio
from fastapi import FastAPI

from rebook_reviews.api.app import create_app
from rebook_reviews.db.models import Member
from rebook_reviews.settings import Settings

TEST_SECRET = "test-secret-for-rebook-reviews-" + "0123456789abcdef" * 4

MEMBERS = {
    "u1": "Alice",
    "u2": "Bob",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'reviews.db'}",
        jwt_secret=TEST_SECRET,
    )


def mint_token(
    settings: Settings,
    subject: str,
    *,
    ttl: timedelta = timedelta(hours=1),
    alg: str | None = None,
    secret: str | None = None,
    **claims: Any,
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
        **claims,
    }
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=alg or settings.jwt_alg)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_for(settings: Settings):
    def _auth(member_id: str) -> dict[str, str]:
        return bearer(mint_token(settings, member_id))

    return _auth


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    application = create_app(settings=settings)
    # ASGITransport does not drive lifespan; run it explicitly.
    async with application.router.lifespan_context(application):
        async with application.state.sessionmaker() as session:
            session.add_all(
                Member(id=member_id, name=name, email=f"{member_id}@example.com")
                for member_id, name in MEMBERS.items()
            )
            await session.commit()
        yield application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
