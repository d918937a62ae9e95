"""
rebook_reviews.api.routers.reviews

Review endpoints.

Responsibilities:
- Create, update and delete reviews for authenticated members (bearer token).
- List a book's reviews page by page (public).
- Translate store outcomes into typed response envelopes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rebook_reviews.api.deps import db_session, settings_dep
from rebook_reviews.api.errors import ApiError, ErrorKind, store_errors
from rebook_reviews.api.schemas import (
    ReviewDeletedEnvelope,
    ReviewEnvelope,
    ReviewPageEnvelope,
    ReviewPostRequest,
    ReviewSummary,
    ReviewUpdateRequest,
)
from rebook_reviews.auth.deps import get_identity
from rebook_reviews.auth.models import UserIdentity
from rebook_reviews.db.models import Review
from rebook_reviews.observability.logging import get_logger
from rebook_reviews.services.review_service import ReviewService
from rebook_reviews.settings import Settings

log = get_logger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])

# Keeps `page * size` within a 64-bit SQL integer for any allowed page size.
MAX_PAGE_INDEX = 1_000_000


def _review_envelope(review: Review, message: str) -> ReviewEnvelope:
    return ReviewEnvelope(
        message=message,
        review_id=review.id,
        nickname=review.member.name,
        content=review.content,
        rating=review.rating,
    )


@router.post("/{book_id}", response_model=ReviewEnvelope)
async def create_review(
    book_id: str,
    body: ReviewPostRequest,
    identity: UserIdentity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> ReviewEnvelope:
    log.info("review_create_requested", book_id=book_id, member_id=identity.member_id)
    with store_errors("Failed to create review", book_id=book_id):
        review = await ReviewService(session=session).register(
            book_id=book_id,
            member_id=identity.member_id,
            content=body.content,
            rating=body.rating,
        )
    log.info("review_created", review_id=review.id, book_id=book_id)
    return _review_envelope(review, "Review created")


@router.put("/{review_id}", response_model=ReviewEnvelope)
async def update_review(
    review_id: str,
    body: ReviewUpdateRequest,
    identity: UserIdentity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> ReviewEnvelope:
    with store_errors("Failed to update review", review_id=review_id):
        svc = ReviewService(session=session)
        await svc.update_review(
            review_id=review_id, content=body.content, member_id=identity.member_id
        )
        review = await svc.find_by_id(review_id)
    log.info("review_updated", review_id=review_id)
    return _review_envelope(review, "Review updated")


@router.delete("/{review_id}", response_model=ReviewDeletedEnvelope)
async def delete_review(
    review_id: str,
    identity: UserIdentity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> ReviewDeletedEnvelope:
    with store_errors("Failed to delete review", review_id=review_id):
        await ReviewService(session=session).delete_review(
            review_id=review_id, member_id=identity.member_id
        )
    log.info("review_deleted", review_id=review_id)
    return ReviewDeletedEnvelope(message="Review deleted", review_id=review_id)


@router.get("/book/{book_id}", response_model=ReviewPageEnvelope)
async def list_reviews(
    book_id: str,
    page: int = Query(default=0, ge=0, le=MAX_PAGE_INDEX),
    size: int | None = Query(default=None, ge=1),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> ReviewPageEnvelope:
    page_size = size if size is not None else settings.default_page_size
    if page_size > settings.max_page_size:
        raise ApiError(
            ErrorKind.bad_request, f"Page size must not exceed {settings.max_page_size}"
        )

    with store_errors("Failed to load reviews", book_id=book_id):
        result = await ReviewService(session=session).get_review_list(
            book_id=book_id, page=page, size=page_size
        )

    return ReviewPageEnvelope(
        message="Reviews loaded",
        reviews=[
            ReviewSummary(
                review_id=r.id,
                nickname=r.member.name,
                content=r.content,
                rating=r.rating,
                created_at=r.created_at,
            )
            for r in result.items
        ],
        current_page=result.page,
        total_items=result.total_items,
        total_pages=result.total_pages,
    )


# --- Module Notes -----------------------------------------------------------
# The identity from `get_identity` is passed explicitly into the service; nothing here
# reads request-scoped globals.
