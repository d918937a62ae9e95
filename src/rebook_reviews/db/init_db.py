"""
rebook_reviews.db.init_db

DB initialization helpers (dev/test convenience).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from rebook_reviews.db import models  # noqa: F401  # registers tables on Base.metadata
from rebook_reviews.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Production databases are provisioned by
    the owning platform, not by this service.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
