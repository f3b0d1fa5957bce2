"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.captcha.turnstile import TurnstileProvider
from infrastructure.http_client import HttpClient
from repositories.indexes import ensure_indexes
from routes.health_routes import router as health_router
from routes.reveal_routes import router as reveal_router
from routes.tag_routes import router as tag_router
from shared.logging import SAMPLING_RATES, get_logger, setup_logging

log = get_logger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging.log_level, settings.logging.log_format)
    SAMPLING_RATES["tag_view"] = settings.logging.sample_rate_tag_view

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            environment=settings.env,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry.sentry_profile_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(settings.db.mongodb_uri)
        app.state.mongo_client = mongo_client
        app.state.db = mongo_client[settings.db.db_name]
        app.state.settings = settings

        turnstile_http = HttpClient(timeout=settings.turnstile.turnstile_timeout_seconds)
        app.state.captcha = TurnstileProvider(
            secret=settings.turnstile.turnstile_secret_key,
            http_client=turnstile_http,
            verify_url=settings.turnstile.turnstile_verify_url,
        )
        if not app.state.captcha.is_configured:
            log.warning("turnstile_secret_not_configured")

        await ensure_indexes(app.state.db)

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await turnstile_http.aclose()
        await mongo_client.close()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    # Finder pages call the functions from any origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(reveal_router)
    app.include_router(tag_router)

    return app
