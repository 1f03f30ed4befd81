"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from skillmatch.api import api_router
from skillmatch.config import Settings, settings as default_settings
from skillmatch.core.exceptions import register_exception_handlers
from skillmatch.core.logging import setup_logging
from skillmatch.db.migrations import ensure_schema
from skillmatch.db.session import Database
from skillmatch.services.mail_service import MailService

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings) -> None:
    """Initialize Sentry for error tracking (only if DSN is properly configured)."""
    if not settings.SENTRY_DSN.startswith("https://"):
        logger.info("Sentry DSN not configured - error tracking disabled")
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=None,
                event_level="ERROR",  # Only send ERROR and above as events
            ),
        ],
        release=settings.APP_VERSION,
        attach_stacktrace=True,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings: Settings = app.state.settings
    if getattr(app.state, "db", None) is None:
        app.state.db = Database.from_settings(settings)
    if settings.AUTO_MIGRATE:
        # A schema failure is fatal: let it abort startup
        await ensure_schema(app.state.db)
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started ({settings.ENVIRONMENT})")
    yield
    # Shutdown
    await app.state.db.dispose()


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    mailer: Optional[MailService] = None,
) -> FastAPI:
    """
    Build the application.

    ``database`` and ``mailer`` default to instances built from ``settings``
    during startup; passing them in lets callers share an engine or swap the
    mail transport.
    """
    settings = settings or default_settings
    setup_logging()
    init_sentry(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Developer networking platform: accounts, profiles, skills, projects and messaging",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.db = database
    app.state.mailer = mailer or MailService(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
