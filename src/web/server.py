"""FastAPI server for the public contact, feedback and exit-intent forms."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from src.config import APP_ENV, CRON_SECRET, TO_EMAIL
from src.db import Database
from src.intake import SubmissionStore
from src.mail_provider import MailProvider, build_provider
from src.monitor import HealthMonitor
from src.orchestrator import NotificationOrchestrator
from src.templating import TemplateRenderer
from src.utils.logger import get_logger
from src.web.routes import (
    contact_router,
    cron_router,
    exit_intent_router,
    feedback_router,
    templates_router,
)

logger = get_logger("vending_notifications.web.server")


@asynccontextmanager
async def _lifespan(app: FastAPI):
    logger.info(
        "server.startup",
        environment=app.state.environment,
        provider=getattr(app.state.provider, "mode", type(app.state.provider).__name__),
    )
    try:
        app.state.database.init()
    except Exception as e:
        # Non-fatal: the health endpoints and the monitor report it.
        logger.error("server.database_init_failed", error=str(e))
    yield
    app.state.database.dispose()
    logger.info("server.shutdown")


def create_app(
    database: Database | None = None,
    provider: MailProvider | Any = None,
    environment: str | None = None,
    business_email: str | None = None,
    cron_secret: str | None = None,
) -> FastAPI:
    """
    Create the FastAPI app with its collaborators wired explicitly onto app.state.
    Anything not passed is built from src.config (the deployment environment).
    """
    environment = (environment or APP_ENV).lower()
    database = database or Database()
    provider = provider if provider is not None else build_provider(environment=environment)
    renderer = TemplateRenderer(database)

    app = FastAPI(title="Vending Notifications", version="0.1.0", lifespan=_lifespan)
    app.state.environment = environment
    app.state.database = database
    app.state.provider = provider
    app.state.renderer = renderer
    app.state.store = SubmissionStore(database)
    app.state.orchestrator = NotificationOrchestrator(
        provider=provider,
        renderer=renderer,
        business_email=business_email or TO_EMAIL,
    )
    app.state.monitor = HealthMonitor(database=database, provider=provider, environment=environment)
    app.state.cron_secret = CRON_SECRET if cron_secret is None else cron_secret

    app.include_router(contact_router)
    app.include_router(feedback_router)
    app.include_router(exit_intent_router)
    app.include_router(cron_router)
    app.include_router(templates_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
