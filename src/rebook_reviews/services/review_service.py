"""
rebook_reviews.services.review_service

Review lifecycle service (transaction + persistence owner).

Responsibilities:
- Register reviews for a book on behalf of a member.
- Update and delete reviews, only for their owner.
- Page through a book's reviews.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from rebook_reviews.db.models import Review
from rebook_reviews.db.repositories.members import MemberRepo
from rebook_reviews.db.repositories.reviews import ReviewRepo
from rebook_reviews.services.exceptions import (
    MemberNotFoundError,
    ReviewNotFoundError,
    ReviewOwnershipError,
)


@dataclass(frozen=True, slots=True)
class ReviewPage:
    items: list[Review]
    page: int
    size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.size) if self.size else 0


class ReviewService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._members = MemberRepo(session)
        self._reviews = ReviewRepo(session)

    async def register(self, *, book_id: str, member_id: str, content: str, rating: int) -> Review:
        member = await self._members.get(member_id)
        if member is None:
            raise MemberNotFoundError(f"member not found: {member_id}")

        review = await self._reviews.create(
            book_id=book_id, member=member, content=content, rating=rating
        )
        await self._session.commit()
        return review

    async def find_by_id(self, review_id: str) -> Review:
        review = await self._reviews.get(review_id)
        if review is None:
            raise ReviewNotFoundError(f"review not found: {review_id}")
        return review

    async def update_review(self, *, review_id: str, content: str, member_id: str) -> Review:
        review = await self._owned_review(
            review_id, member_id, "Only the author of a review can edit it"
        )
        review.content = content
        await self._session.commit()
        return review

    async def delete_review(self, *, review_id: str, member_id: str) -> None:
        review = await self._owned_review(
            review_id, member_id, "Only the author of a review can delete it"
        )
        await self._reviews.delete(review)
        await self._session.commit()

    async def get_review_list(self, *, book_id: str, page: int, size: int) -> ReviewPage:
        total = await self._reviews.count_for_book(book_id)
        items = await self._reviews.list_for_book(book_id, offset=page * size, limit=size)
        return ReviewPage(items=items, page=page, size=size, total_items=total)

    async def _owned_review(self, review_id: str, member_id: str, denial: str) -> Review:
        # Lock the row so the ownership check and the write see the same record.
        review = await self._reviews.get(review_id, for_update=True)
        if review is None:
            raise ReviewNotFoundError(f"review not found: {review_id}")
        if review.member_id != member_id:
            raise ReviewOwnershipError(denial)
        return review


# --- Module Notes -----------------------------------------------------------
# Every mutating method commits on success. On failure the request-scoped session
# is closed without commit, which rolls the transaction back.
