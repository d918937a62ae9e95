"""
rebook_reviews.db.repositories.members

Read access to `Member` rows.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rebook_reviews.db.models import Member


class MemberRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, member_id: str) -> Member | None:
        return await self._session.get(Member, member_id)


# --- Module Notes -----------------------------------------------------------
# Members are written by the account service; this service only reads them.
