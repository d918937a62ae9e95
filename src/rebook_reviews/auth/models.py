"""
rebook_reviews.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`UserIdentity`) passed into review operations.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """
    Decoded bearer-token identity. Lives for a single request only.
    """

    member_id: str
    email: str | None = None
    role: str = "USER"


# --- Module Notes -----------------------------------------------------------
# `member_id` is the JWT `sub` claim and is compared against `Review.member_id`
# for ownership checks.
