"""
rebook_reviews.db.models

Persistence schema for reviews.

Responsibilities:
- Member: reviewer account projection (display name used as the review nickname).
- Review: a member's rating and text for a book.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rebook_reviews.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC; SQLite does not keep tz info anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


def _new_id() -> str:
    return str(uuid.uuid4())


class Member(Base):
    __tablename__ = "members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(256), nullable=True, unique=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    reviews: Mapped[list[Review]] = relationship(back_populates="member")


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    # Books live in the catalog service; we only keep the identifier.
    book_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    member_id: Mapped[str] = mapped_column(ForeignKey("members.id"), nullable=False, index=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    # Eager load: the nickname is part of every review payload.
    member: Mapped[Member] = relationship(
        back_populates="reviews", lazy="joined", innerjoin=True
    )

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
        Index("ix_reviews_book_created", "book_id", "created_at"),
    )


# --- Module Notes -----------------------------------------------------------
# `member_id` is set at creation and never reassigned; ownership checks in
# `services.review_service` compare it against the token subject.
