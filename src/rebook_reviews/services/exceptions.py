"""Domain exceptions for the review service."""


class ReviewServiceError(Exception):
    """Base exception for review service failures."""


class ReviewNotFoundError(ReviewServiceError):
    pass


class MemberNotFoundError(ReviewServiceError):
    pass


class ReviewOwnershipError(ReviewServiceError):
    """Caller is authenticated but does not own the review."""
