"""
rebook_reviews.api

HTTP API package (FastAPI).

Responsibilities:
- Application factory and router registration.
- Dependency wiring (settings, DB sessions).
- Error kinds and response envelopes.
"""

# Package marker.
