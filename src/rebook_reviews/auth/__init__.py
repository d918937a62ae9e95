"""
rebook_reviews.auth

Authentication package.

Responsibilities:
- JWT validation with classified failures (expired / unsupported / invalid).
- FastAPI dependency that turns an `Authorization` header into a `UserIdentity`.
"""

# Package marker.
