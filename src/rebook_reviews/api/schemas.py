"""
rebook_reviews.api.schemas

Request DTOs and response envelopes for the reviews API.

Responsibilities:
- Validate review request bodies.
- Define typed success/failure envelopes serialized with camelCase keys.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONTENT_MAX_LENGTH = 2000


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReviewPostRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)
    rating: int = Field(ge=1, le=5)


class ReviewUpdateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)


class Envelope(CamelModel):
    """Fields every response body carries."""

    status_code: int = 200
    success: bool = True
    message: str


class ReviewEnvelope(Envelope):
    review_id: str
    nickname: str
    content: str
    rating: int


class ReviewDeletedEnvelope(Envelope):
    review_id: str


class ReviewSummary(CamelModel):
    review_id: str
    nickname: str
    content: str
    rating: int
    created_at: datetime


class ReviewPageEnvelope(Envelope):
    reviews: list[ReviewSummary] = Field(default_factory=list)
    current_page: int
    total_items: int
    total_pages: int


class ErrorDetail(CamelModel):
    kind: str
    status: int
    message: str


class ErrorEnvelope(Envelope):
    success: bool = False
    error: ErrorDetail
