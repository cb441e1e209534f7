"""API routers."""

from src.web.routes.contact import router as contact_router
from src.web.routes.cron import router as cron_router
from src.web.routes.exit_intent import router as exit_intent_router
from src.web.routes.feedback import router as feedback_router
from src.web.routes.templates import router as templates_router

__all__ = [
    "contact_router",
    "feedback_router",
    "exit_intent_router",
    "cron_router",
    "templates_router",
]
