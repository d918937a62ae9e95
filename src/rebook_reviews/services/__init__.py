"""
rebook_reviews.services

Service layer.

Responsibilities:
- Own transaction boundaries for review operations.
- Enforce review ownership.
"""

# Package marker.
