"""
rebook_reviews.api.routers

HTTP routers.

Responsibilities:
- Health probes.
- Review CRUD and listing.
"""

# Package marker.
