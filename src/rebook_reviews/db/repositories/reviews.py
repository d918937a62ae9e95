"""
rebook_reviews.db.repositories.reviews

Repository for `Review` entities.

Responsibilities:
- Create, fetch, and delete reviews.
- Page through a book's reviews newest-first.
"""

from __future__ import annotations

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rebook_reviews.db.models import Member, Review


class ReviewRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, book_id: str, member: Member, content: str, rating: int) -> Review:
        review = Review(book_id=book_id, member=member, content=content, rating=rating)
        self._session.add(review)
        await self._session.flush()
        return review

    async def get(self, review_id: str, *, for_update: bool = False) -> Review | None:
        return await self._session.get(Review, review_id, with_for_update=for_update)

    async def count_for_book(self, book_id: str) -> int:
        stmt = select(func.count()).select_from(Review).where(Review.book_id == book_id)
        return int((await self._session.execute(stmt)).scalar_one())

    async def list_for_book(self, book_id: str, *, offset: int, limit: int) -> list[Review]:
        # `id` breaks ties so equal timestamps still page deterministically.
        stmt = (
            select(Review)
            .where(Review.book_id == book_id)
            .order_by(desc(Review.created_at), Review.id)
            .offset(offset)
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def delete(self, review: Review) -> None:
        await self._session.delete(review)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# `Review.member` is joined-eager, so the nickname is available without extra queries.
