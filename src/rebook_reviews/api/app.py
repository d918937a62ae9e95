"""
rebook_reviews.api.app

FastAPI app factory for the review service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rebook_reviews import __version__
from rebook_reviews.api.errors import register_error_handlers
from rebook_reviews.api.routers.health import router as health_router
from rebook_reviews.api.routers.reviews import router as reviews_router
from rebook_reviews.auth.jwt import JwtConfig, JwtTokenValidator
from rebook_reviews.db.init_db import init_db
from rebook_reviews.db.session import create_engine, create_sessionmaker
from rebook_reviews.observability.logging import configure_logging, get_logger
from rebook_reviews.observability.middleware import RequestContextMiddleware
from rebook_reviews.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Re:Book Reviews",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_validator = JwtTokenValidator(JwtConfig.from_settings(settings))

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(reviews_router)

    return app
